from typing import Optional

from .base import CamelModel
from .user import UserOut


class SignupRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(CamelModel):
    user: UserOut
    token: str


class MeResponse(CamelModel):
    user: UserOut
