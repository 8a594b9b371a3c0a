import enum
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, func, Enum
from sqlalchemy.orm import relationship
from ..db.base import Base


class RoleEnum(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    CASHIER = "CASHIER"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(RoleEnum, name="user_role"), nullable=False, default=RoleEnum.USER)
    dob = Column(Date, nullable=True)
    # админ, создавший аккаунт; не владелец, при удалении создателя ссылка обнуляется
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # связи
    created_by = relationship("User", remote_side=[id], back_populates="created_users", lazy="selectin")
    created_users = relationship("User", back_populates="created_by")
    reservations = relationship(
        "Reservation", back_populates="user", cascade="all, delete-orphan"
    )
