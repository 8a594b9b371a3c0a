from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./steakz.db"
    SQL_ECHO: bool = False

    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_HOURS: int = 24

    PORT: int = 3001
    CORS_ORIGIN: str = "http://localhost:3000"

    # доступные слоты бронирования (порядок сохраняется в выдаче)
    TIME_SLOTS: List[str] = ["13:00", "19:00"]

    SEED_ADMIN: bool = True
    ADMIN_USERNAME: str = "admin"
    ADMIN_EMAIL: str = "admin@steakz.com"
    ADMIN_PASSWORD: str = "admin123"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        frozen = True


@lru_cache
def get_settings() -> Settings:
    """
    Настройки читаются один раз на процесс.
    Использовать в Depends(get_settings), чтобы тесты могли их подменить.
    """
    return Settings()


settings = get_settings()
