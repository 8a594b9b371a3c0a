from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.config import Settings, get_settings
from steakz.core.deps import require_roles
from steakz.core.errors import ForbiddenError, storage_errors
from steakz.crud.reservation import get_reservations
from steakz.db.session import get_async_session
from steakz.models import RoleEnum, User
from steakz.schemas.report import DayReport
from steakz.schemas.reservation import ReservationCreate, ReservationMessage, ReservationRead
from steakz.services import reservations as lifecycle
from steakz.services.reports import build_report


router = APIRouter(prefix="/api/reservations", tags=["reservations"])


@router.get("", response_model=List[ReservationRead])
async def list_reservations(
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reservations:list")),
):
    """
    Все брони (ADMIN, MANAGER).
    """
    with storage_errors("Failed to fetch reservations"):
        return await get_reservations(db)


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
async def book_reservation(
    body: ReservationCreate,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
    actor: User = Depends(require_roles("reservations:book")),
):
    """
    Бронь с позициями заказа на любого пользователя (ADMIN, MANAGER).
    """
    with storage_errors("Failed to create reservation"):
        return await lifecycle.book(db, actor, body, settings.TIME_SLOTS)


@router.post("/create", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
async def book_own_reservation(
    body: ReservationCreate,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
    actor: User = Depends(require_roles("reservations:book-self")),
):
    """
    Бронь с позициями заказа. USER бронирует только на себя.
    """
    with storage_errors("Failed to create reservation"):
        return await lifecycle.book(db, actor, body, settings.TIME_SLOTS)


@router.get("/slots", response_model=List[str])
async def get_available_times(
    day: date = Query(..., alias="date", description="Дата (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
    _: User = Depends(require_roles("reservations:slots")),
):
    """
    Свободные слоты на дату.
    """
    with storage_errors("Error checking availability"):
        return await lifecycle.available_times(db, day, settings.TIME_SLOTS)


@router.get("/user", response_model=List[ReservationRead])
async def get_user_reservations(
    user_id: Optional[int] = Query(None, alias="userId", description="ID пользователя (ADMIN, MANAGER)"),
    db: AsyncSession = Depends(get_async_session),
    actor: User = Depends(require_roles("reservations:mine")),
):
    """
    Брони пользователя по дате. По умолчанию текущего.
    """
    target_id = user_id if user_id is not None else actor.id
    if target_id != actor.id and actor.role not in (RoleEnum.ADMIN, RoleEnum.MANAGER):
        raise ForbiddenError("Cannot view other users' reservations")

    with storage_errors("Failed to fetch user reservations"):
        return await lifecycle.list_for_user(db, target_id)


@router.get("/today", response_model=List[ReservationRead])
async def get_todays_reservations(
    day: Optional[date] = Query(None, description="Дата (по умолчанию сегодня)"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reservations:today")),
):
    """
    Брони и заказы за день (ADMIN, MANAGER, CASHIER).
    """
    with storage_errors("Failed to fetch today's orders"):
        return await lifecycle.list_for_day(db, day or date.today())


@router.get("/unpaid", response_model=List[ReservationRead])
async def get_unpaid_reservations(
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reservations:unpaid")),
):
    with storage_errors("Could not fetch unpaid reservations"):
        return await get_reservations(db, is_paid=False)


@router.get("/report", response_model=DayReport)
async def generate_report(
    day: Optional[date] = Query(None, description="Дата отчёта (по умолчанию сегодня)"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reservations:report")),
):
    """
    Отчёт за день:
    - totalOrders (кол-во броней)
    - totalRevenue (сумма по оплаченным)
    - mostOrderedDishes (топ-5 блюд)
    """
    with storage_errors("Failed to generate report"):
        snapshot = await lifecycle.list_for_day(db, day or date.today())
    return build_report(snapshot)


@router.patch("/{reservation_id}/mark-paid", response_model=ReservationMessage)
async def mark_reservation_paid(
    reservation_id: int = Path(..., description="ID брони"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reservations:mark-paid")),
):
    with storage_errors("Failed to mark as paid"):
        reservation = await lifecycle.mark_paid(db, reservation_id)
    return {"message": "Reservation marked as paid", "reservation": reservation}


@router.patch("/{reservation_id}/serve", response_model=ReservationMessage)
async def mark_reservation_served(
    reservation_id: int = Path(..., description="ID брони"),
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reservations:serve")),
):
    with storage_errors("Failed to update reservation"):
        reservation = await lifecycle.mark_served(db, reservation_id)
    return {"message": "Reservation marked as served", "reservation": reservation}
