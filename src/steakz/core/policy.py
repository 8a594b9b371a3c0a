"""
Правила доступа.

Наборы ролей для маршрутов заданы данными (``ROUTE_ROLES``), а правила
самообслуживания для аккаунтов это чистые функции: они либо возвращаются,
либо бросают ``BadRequestError`` / ``ForbiddenError``. Ничего не пишут в базу.
"""

import logging
from typing import AbstractSet, Dict, FrozenSet, Optional, Protocol

from ..models.user import RoleEnum
from .errors import BadRequestError, ForbiddenError

logger = logging.getLogger(__name__)

ALL_ROLES: FrozenSet[RoleEnum] = frozenset(RoleEnum)

ADMIN_ONLY = frozenset({RoleEnum.ADMIN})
STAFF = frozenset({RoleEnum.ADMIN, RoleEnum.MANAGER})
FRONT_DESK = frozenset({RoleEnum.ADMIN, RoleEnum.MANAGER, RoleEnum.CASHIER})
CHECKOUT = frozenset({RoleEnum.ADMIN, RoleEnum.CASHIER})

ROUTE_ROLES: Dict[str, FrozenSet[RoleEnum]] = {
    # бронирования
    "reservations:list": STAFF,
    "reservations:book": STAFF,
    "reservations:book-self": STAFF | {RoleEnum.USER},
    "reservations:slots": STAFF | {RoleEnum.USER},
    "reservations:mine": ALL_ROLES,
    "reservations:today": FRONT_DESK,
    "reservations:unpaid": FRONT_DESK,
    "reservations:mark-paid": CHECKOUT,
    "reservations:serve": CHECKOUT,
    "reservations:report": STAFF,
    "reports:summary": STAFF,
    # пользователи
    "users:list": ALL_ROLES,
    "users:view": ALL_ROLES,
    "users:profile": ADMIN_ONLY,
    "users:role": ADMIN_ONLY,
    "admin:users": ADMIN_ONLY,
    # отзывы
    "reviews:moderate": ADMIN_ONLY,
}


class UserLike(Protocol):
    id: int
    role: RoleEnum
    created_by_id: Optional[int]


def _role_value(role) -> str:
    return role.value if isinstance(role, RoleEnum) else role


def check_role(role, allowed: AbstractSet[RoleEnum]) -> None:
    """
    Статическая проверка роли: точное совпадение с одним из значений enum.
    """
    if _role_value(role) not in {r.value for r in allowed}:
        logger.warning(f"Role {role!r} denied, allowed: {sorted(r.value for r in allowed)}")
        raise ForbiddenError("Access denied")


def resolve_new_role(role: Optional[str]) -> RoleEnum:
    """Роль для нового аккаунта: USER по умолчанию."""
    if role is None:
        return RoleEnum.USER
    try:
        return RoleEnum(role)
    except ValueError:
        raise BadRequestError("Invalid role")


def is_protected_admin(actor: UserLike, target: UserLike) -> bool:
    """
    Чужого админа может менять только тот, кто его создал (или он сам).
    """
    return (
        _role_value(target.role) == RoleEnum.ADMIN.value
        and target.id != actor.id
        and target.created_by_id != actor.id
    )


def change_role(actor: UserLike, target: UserLike, new_role: Optional[str]) -> RoleEnum:
    if new_role is None:
        raise BadRequestError("Role is required")
    role = resolve_new_role(new_role)
    if target.id == actor.id:
        raise BadRequestError("Cannot change your own role")
    if is_protected_admin(actor, target):
        raise ForbiddenError("Cannot modify another admin's role")
    return role


def delete_user(actor: UserLike, target: UserLike) -> None:
    if target.id == actor.id:
        raise BadRequestError("Cannot delete your own account")
    if is_protected_admin(actor, target):
        raise ForbiddenError("Cannot delete another admin account")


def update_user(
    actor: UserLike,
    target: UserLike,
    username: Optional[str] = None,
    username_owner: Optional[UserLike] = None,
) -> None:
    """
    ``username_owner`` - пользователь, у которого уже есть запрошенный username
    (если такой нашёлся).
    """
    if is_protected_admin(actor, target):
        raise ForbiddenError("Cannot modify other admin accounts")
    if username is not None and username_owner is not None and username_owner.id != target.id:
        raise BadRequestError("Username already exists")


def view_user(actor: UserLike, target: UserLike) -> None:
    if _role_value(actor.role) == RoleEnum.USER.value and _role_value(target.role) != RoleEnum.USER.value:
        raise ForbiddenError("Unauthorized to view this user")


def ensure_username_free(existing: Optional[UserLike]) -> None:
    if existing is not None:
        raise BadRequestError("Username already exists")
