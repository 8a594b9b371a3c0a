from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings, get_settings
from ..db.session import get_async_session
from ..models.user import User
from .errors import AuthenticationError
from .policy import ROUTE_ROLES, check_role
from .security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return decode_access_token(credentials.credentials, settings)


async def get_current_user(
    payload: Dict[str, Any] = Depends(get_token_payload),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Загружает актуальную запись пользователя: роль берётся из базы, а не из токена.
    """
    user = await db.get(User, payload["userId"])
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


def require_roles(route: str):
    """
    Зависимость для маршрута: пропускает только роли из ROUTE_ROLES[route].
    """
    allowed = ROUTE_ROLES[route]

    async def dependency(user: User = Depends(get_current_user)) -> User:
        check_role(user.role, allowed)
        return user

    return dependency
