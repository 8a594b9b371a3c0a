import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.config import Settings, get_settings
from steakz.core.deps import get_token_payload
from steakz.core.errors import AuthenticationError, NotFoundError, storage_errors
from steakz.core.security import create_access_token, verify_password
from steakz.crud.user import get_user, get_user_by_username
from steakz.db.session import get_async_session
from steakz.schemas.auth import AuthResponse, LoginRequest, MeResponse, SignupRequest
from steakz.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
):
    """
    Регистрация. Роль по умолчанию USER.
    """
    with storage_errors("Signup failed"):
        user = await accounts.create_account(db, body.username, body.password, body.role)

    token = create_access_token(user.id, user.role.value, settings)
    return {"user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
):
    with storage_errors("Login failed"):
        user = await get_user_by_username(db, body.username or "")

    if user is None or not body.password or not verify_password(body.password, user.password_hash):
        logger.info(f"Failed login for {body.username!r}")
        raise AuthenticationError("Invalid username or password")

    token = create_access_token(user.id, user.role.value, settings)
    return {"user": user, "token": token}


@router.get("/me", response_model=MeResponse)
async def me(
    payload: Dict[str, Any] = Depends(get_token_payload),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Текущий пользователь. 404, если аккаунт удалён после выдачи токена.
    """
    with storage_errors("Failed to fetch user"):
        user = await get_user(db, payload["userId"])
    if user is None:
        raise NotFoundError("User not found")
    return {"user": user}
