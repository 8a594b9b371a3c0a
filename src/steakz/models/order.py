from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from ..db.base import Base


class Order(Base):
    """Позиция заказа в рамках брони. Создаётся вместе с бронью и не меняется."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False)
    menu_item = Column(String(128), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # фиксируется на момент заказа

    # связи
    reservation = relationship("Reservation", back_populates="orders")
