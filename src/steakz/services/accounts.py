"""
Операции над аккаунтами: загрузка цели, проверка правил из core.policy,
затем одна запись в базу.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from steakz.core import policy
from steakz.core.errors import BadRequestError, NotFoundError
from steakz.core.security import hash_password
from steakz.crud import user as crud
from steakz.models import User

logger = logging.getLogger(__name__)


async def get_target(db: AsyncSession, user_id: int) -> User:
    target = await crud.get_user(db, user_id)
    if target is None:
        raise NotFoundError("User not found")
    return target


async def create_account(
    db: AsyncSession,
    username: Optional[str],
    password: Optional[str],
    role: Optional[str] = None,
    creator: Optional[User] = None,
) -> User:
    username = (username or "").strip()
    if not username or not (password or "").strip():
        raise BadRequestError("Username and password are required")

    new_role = policy.resolve_new_role(role)
    policy.ensure_username_free(await crud.get_user_by_username(db, username))

    user = await crud.create_user(
        db,
        username=username,
        password_hash=hash_password(password),
        role=new_role,
        created_by_id=creator.id if creator else None,
    )
    logger.info(
        f"User {user.username} ({user.role.value}) created"
        + (f" by {creator.username}" if creator else "")
    )
    return user


async def view_account(db: AsyncSession, actor: User, user_id: int) -> User:
    target = await get_target(db, user_id)
    policy.view_user(actor, target)
    return target


async def change_role(db: AsyncSession, actor: User, user_id: int, role: Optional[str]) -> User:
    target = await get_target(db, user_id)
    new_role = policy.change_role(actor, target, role)
    updated = await crud.update_user(db, target, role=new_role)
    logger.info(f"User {updated.username} role changed to {new_role.value} by {actor.username}")
    return updated


async def update_account(
    db: AsyncSession,
    actor: User,
    user_id: int,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> User:
    username = (username or "").strip() or None
    password = password if (password or "").strip() else None
    if username is None and password is None:
        raise BadRequestError("No update data provided")

    target = await get_target(db, user_id)
    owner = await crud.get_user_by_username(db, username) if username is not None else None
    policy.update_user(actor, target, username=username, username_owner=owner)

    fields = {}
    if username is not None:
        fields["username"] = username
    if password is not None:
        fields["password_hash"] = hash_password(password)
    return await crud.update_user(db, target, **fields)


async def delete_account(db: AsyncSession, actor: User, user_id: int) -> str:
    target = await get_target(db, user_id)
    policy.delete_user(actor, target)
    username = target.username
    await crud.delete_user(db, target)
    logger.info(f"User {username} deleted by {actor.username}")
    return username
