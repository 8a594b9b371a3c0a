from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.models import User, RoleEnum


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    """
    Возвращает пользователя по ID (поля перечитываются из базы).
    """
    stmt = select(User).where(User.id == user_id).execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalars().first()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalars().first()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def list_users(
    db: AsyncSession,
    role: Optional[RoleEnum] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> Tuple[List[User], int]:
    """
    Список пользователей (новые первыми) и общее количество с учётом фильтра.
    """
    count_stmt = select(func.count(User.id))
    stmt = select(User).order_by(User.created_at.desc(), User.id.desc())
    if role is not None:
        count_stmt = count_stmt.where(User.role == role)
        stmt = stmt.where(User.role == role)
    if limit:
        stmt = stmt.limit(limit)
    if offset:
        stmt = stmt.offset(offset)

    total = (await db.execute(count_stmt)).scalar_one()
    result = await db.execute(stmt)
    return result.scalars().all(), total


async def create_user(
    db: AsyncSession,
    username: str,
    password_hash: str,
    role: RoleEnum = RoleEnum.USER,
    email: Optional[str] = None,
    dob: Optional[date] = None,
    created_by_id: Optional[int] = None,
) -> User:
    user = User(
        username=username,
        password_hash=password_hash,
        role=role,
        email=email,
        dob=dob,
        created_by_id=created_by_id,
    )
    db.add(user)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return await get_user(db, user.id)


async def update_user(db: AsyncSession, user: User, **fields) -> User:
    """
    Частичное обновление: записываются только переданные поля.
    """
    for key, value in fields.items():
        setattr(user, key, value)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return await get_user(db, user.id)


async def delete_user(db: AsyncSession, user: User) -> None:
    """
    Удаляет пользователя вместе с его бронями; созданные им аккаунты остаются.
    """
    await db.delete(user)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
