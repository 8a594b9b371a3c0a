import enum
from sqlalchemy import (
    Column, Integer, String, Boolean, Date, DateTime, ForeignKey, Enum as SAEnum, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from ..db.base import Base


class ReservationStatusEnum(str, enum.Enum):
    booked = "booked"
    paid = "paid"


class Reservation(Base):
    __tablename__ = "reservations"
    # один слот на дату
    __table_args__ = (UniqueConstraint("date", "time", name="uq_reservations_date_time"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(128), nullable=False)  # имя гостя
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # слот, например "19:00"
    is_paid = Column(Boolean, nullable=False, default=False)
    status = Column(
        SAEnum(ReservationStatusEnum, name="reservation_status"),
        nullable=False,
        default=ReservationStatusEnum.booked,
    )
    served = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # связи
    user = relationship("User", back_populates="reservations", lazy="selectin")
    orders = relationship(
        "Order", back_populates="reservation", cascade="all, delete-orphan", lazy="selectin"
    )
