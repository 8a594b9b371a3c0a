from datetime import datetime
from typing import Optional

from pydantic import conint, constr

from .base import CamelModel


class ReviewRead(CamelModel):
    id: int
    content: str
    user_name: str
    stars: int
    created_at: Optional[datetime] = None


class ReviewAdminRead(ReviewRead):
    approved: bool


class ReviewCreate(CamelModel):
    content: constr(strip_whitespace=True, min_length=1)
    user_name: constr(strip_whitespace=True, min_length=1, max_length=100)
    stars: conint(ge=1, le=5) = 5


class ContactMessage(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
