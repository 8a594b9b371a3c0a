from datetime import date as date_, datetime
from typing import List, Optional

from pydantic import confloat, constr

from ..models.reservation import ReservationStatusEnum
from .base import CamelModel


class OrderRead(CamelModel):
    id: int
    reservation_id: int
    menu_item: str
    price: float


class ReservationUser(CamelModel):
    id: int
    username: str


class ReservationRead(CamelModel):
    id: int
    user_id: int
    name: str
    date: date_
    time: str
    is_paid: bool
    status: ReservationStatusEnum
    served: bool
    created_at: Optional[datetime] = None
    orders: List[OrderRead] = []
    user: Optional[ReservationUser] = None


class OrderCreate(CamelModel):
    item: constr(strip_whitespace=True, min_length=1, max_length=128)
    price: confloat(ge=0)


class ReservationCreate(CamelModel):
    """
    Обязательность userId/name/date/time проверяется в сервисе, чтобы
    отдать 400 "Missing reservation details" как у остальных проверок.
    """

    user_id: Optional[int] = None
    name: Optional[str] = None
    date: Optional[date_] = None
    time: Optional[str] = None
    orders: List[OrderCreate] = []


class ReservationMessage(CamelModel):
    message: str
    reservation: ReservationRead
