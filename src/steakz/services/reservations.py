"""
Жизненный цикл брони.

Бронь создаётся в состоянии booked / не оплачена / не подана. Флаги
``is_paid`` и ``served`` независимы: их можно выставлять в любом порядке,
и повторная установка ничего не меняет.
"""

import logging
from datetime import date, timedelta
from typing import List, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.core.errors import BadRequestError, ForbiddenError, NotFoundError
from steakz.crud import reservation as crud
from steakz.crud.user import get_user
from steakz.models import Reservation, RoleEnum, User
from steakz.schemas.reservation import ReservationCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "date", "time", "name")


def day_bounds(day: date) -> Tuple[date, date]:
    """Полуинтервал [day, day + 1)."""
    return day, day + timedelta(days=1)


def list_available_times(slots: Sequence[str], booked: Sequence[str]) -> List[str]:
    """
    Свободные слоты в порядке, заданном настройками, а не порядке бронирования.
    """
    taken = set(booked)
    return [slot for slot in slots if slot not in taken]


def validate_booking(payload: ReservationCreate, slots: Sequence[str]) -> None:
    missing = [field for field in REQUIRED_FIELDS if getattr(payload, field) in (None, "")]
    if missing or not payload.name.strip():
        raise BadRequestError("Missing reservation details")
    if payload.time not in slots:
        raise BadRequestError(f"Invalid time slot: {payload.time}")


async def available_times(db: AsyncSession, day: date, slots: Sequence[str]) -> List[str]:
    booked = await crud.get_booked_times(db, day)
    return list_available_times(slots, booked)


async def book(
    db: AsyncSession,
    actor: User,
    payload: ReservationCreate,
    slots: Sequence[str],
) -> Reservation:
    """
    Проверяет запрос и создаёт бронь с позициями одной транзакцией.
    USER может бронировать только на себя.
    """
    validate_booking(payload, slots)

    if actor.role == RoleEnum.USER and payload.user_id != actor.id:
        raise ForbiddenError("Users can only book reservations for themselves")

    if await get_user(db, payload.user_id) is None:
        raise NotFoundError("User not found")

    if payload.time in await crud.get_booked_times(db, payload.date):
        raise BadRequestError("Time slot already booked")

    try:
        reservation = await crud.create_reservation(
            db,
            user_id=payload.user_id,
            name=payload.name.strip(),
            day=payload.date,
            time=payload.time,
            orders=[{"item": o.item, "price": o.price} for o in payload.orders],
        )
    except IntegrityError:
        # слот заняли параллельным запросом после проверки выше
        logger.warning(f"Slot {payload.date} {payload.time} taken concurrently")
        raise BadRequestError("Time slot already booked")
    logger.info(
        f"Reservation {reservation.id} booked for user {payload.user_id} "
        f"on {payload.date} {payload.time} with {len(payload.orders)} orders"
    )
    return reservation


async def _get_or_404(db: AsyncSession, reservation_id: int) -> Reservation:
    reservation = await crud.get_reservation_by_id(db, reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation not found")
    return reservation


async def mark_paid(db: AsyncSession, reservation_id: int) -> Reservation:
    reservation = await _get_or_404(db, reservation_id)
    if reservation.is_paid:
        return reservation
    return await crud.set_paid(db, reservation)


async def mark_served(db: AsyncSession, reservation_id: int) -> Reservation:
    reservation = await _get_or_404(db, reservation_id)
    if reservation.served:
        return reservation
    return await crud.set_served(db, reservation)


async def list_for_day(db: AsyncSession, day: date) -> List[Reservation]:
    start, end = day_bounds(day)
    return await crud.get_reservations_between(db, start, end)


async def list_for_user(db: AsyncSession, user_id: int) -> List[Reservation]:
    return await crud.get_user_reservations(db, user_id)
