from datetime import date, datetime
from typing import List, Optional

from pydantic import EmailStr

from ..models.user import RoleEnum
from .base import CamelModel


class CreatorOut(CamelModel):
    username: str


class UserOut(CamelModel):
    id: int
    username: str
    email: Optional[str] = None
    role: RoleEnum
    dob: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[CreatorOut] = None


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class UserPage(CamelModel):
    users: List[UserOut]
    pagination: Pagination


class AdminUserCreate(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class AdminUserUpdate(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None

    class Config:
        extra = "forbid"


class RoleUpdate(CamelModel):
    role: Optional[str] = None


class ProfileUpdate(CamelModel):
    email: Optional[EmailStr] = None
    dob: Optional[date] = None


class UserMessage(CamelModel):
    message: str
    user: UserOut


class Message(CamelModel):
    message: str

