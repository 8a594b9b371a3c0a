import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import health, users
from .config import settings
from .core.errors import register_exception_handlers
from .db.session import AsyncSessionLocal
from .services.seed import seed_admin_user
from steakz.api.routes.admin import router as admin_router
from steakz.api.routes.auth import router as auth_router
from steakz.api.routes.contact import router as contact_router
from steakz.api.routes.reports import router as reports_router
from steakz.api.routes.reservations import router as reservations_router
from steakz.api.routes.reviews import router as reviews_router

logger = logging.getLogger("steakz")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.SEED_ADMIN:
        async with AsyncSessionLocal() as session:
            await seed_admin_user(session, settings)
    logger.info("Application started")
    yield
    logger.info("Application stopped")


app = FastAPI(title="Steakz", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

# Подключаем роуты
app.include_router(health.router)
app.include_router(auth_router)
app.include_router(users.router)
app.include_router(admin_router)
app.include_router(reservations_router)
app.include_router(reports_router)
app.include_router(reviews_router)
app.include_router(contact_router)


@app.get("/", include_in_schema=False)
async def root():
    return {"message": "Welcome to the homepage!"}


def run() -> None:
    import uvicorn

    uvicorn.run("steakz.main:app", host="0.0.0.0", port=settings.PORT)
