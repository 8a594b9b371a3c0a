from .user import User, RoleEnum
from .reservation import Reservation, ReservationStatusEnum
from .order import Order
from .comment import Comment

__all__ = [
    "User",
    "RoleEnum",
    "Reservation",
    "ReservationStatusEnum",
    "Order",
    "Comment",
]
