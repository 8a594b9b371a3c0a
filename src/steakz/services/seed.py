import logging

from sqlalchemy.ext.asyncio import AsyncSession

from steakz.config import Settings
from steakz.core.security import hash_password
from steakz.crud.user import create_user, get_user_by_email, get_user_by_username
from steakz.models import RoleEnum, User

logger = logging.getLogger(__name__)


async def seed_admin_user(db: AsyncSession, settings: Settings) -> User:
    """
    Создаёт админа по умолчанию, если его ещё нет (поиск по email или username).
    """
    existing = await get_user_by_email(db, settings.ADMIN_EMAIL)
    if existing is None:
        existing = await get_user_by_username(db, settings.ADMIN_USERNAME)
    if existing is not None:
        logger.info("Admin user already exists")
        return existing

    admin = await create_user(
        db,
        username=settings.ADMIN_USERNAME,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        role=RoleEnum.ADMIN,
        email=settings.ADMIN_EMAIL,
    )
    logger.info(f"Admin user {admin.username} seeded")
    return admin
