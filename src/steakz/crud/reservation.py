from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.models import Order, Reservation, ReservationStatusEnum


async def get_reservations(
    db: AsyncSession,
    is_paid: Optional[bool] = None,
) -> List[Reservation]:
    """
    Возвращает брони (с позициями и пользователем), новые первыми.
    """
    stmt = select(Reservation).order_by(Reservation.created_at.desc(), Reservation.id.desc())
    if is_paid is not None:
        stmt = stmt.where(Reservation.is_paid == is_paid)

    result = await db.execute(stmt)
    return result.scalars().unique().all()


async def get_reservation_by_id(db: AsyncSession, reservation_id: int) -> Optional[Reservation]:
    stmt = (
        select(Reservation)
        .where(Reservation.id == reservation_id)
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalars().unique().first()


async def get_reservations_between(db: AsyncSession, start: date, end: date) -> List[Reservation]:
    """
    Брони с датой в полуинтервале [start, end).
    """
    stmt = (
        select(Reservation)
        .where(Reservation.date >= start, Reservation.date < end)
        .order_by(Reservation.date, Reservation.time, Reservation.id)
    )
    result = await db.execute(stmt)
    return result.scalars().unique().all()


async def get_user_reservations(db: AsyncSession, user_id: int) -> List[Reservation]:
    stmt = (
        select(Reservation)
        .where(Reservation.user_id == user_id)
        .order_by(Reservation.date.asc(), Reservation.id.asc())
    )
    result = await db.execute(stmt)
    return result.scalars().unique().all()


async def get_booked_times(db: AsyncSession, day: date) -> List[str]:
    result = await db.execute(select(Reservation.time).where(Reservation.date == day))
    return list(result.scalars().all())


async def count_reservations(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Reservation.id)))
    return result.scalar_one()


async def create_reservation(
    db: AsyncSession,
    user_id: int,
    name: str,
    day: date,
    time: str,
    orders: Sequence[dict],
) -> Reservation:
    """
    Создаёт бронь и все её позиции одной транзакцией: либо всё, либо ничего.
    """
    reservation = Reservation(
        user_id=user_id,
        name=name,
        date=day,
        time=time,
        is_paid=False,
        status=ReservationStatusEnum.booked,
        served=False,
        orders=[Order(menu_item=o["item"], price=o["price"]) for o in orders],
    )
    db.add(reservation)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    # created_at проставляется базой, перечитываем бронь целиком
    return await get_reservation_by_id(db, reservation.id)


async def set_paid(db: AsyncSession, reservation: Reservation) -> Reservation:
    reservation.is_paid = True
    reservation.status = ReservationStatusEnum.paid
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return reservation


async def set_served(db: AsyncSession, reservation: Reservation) -> Reservation:
    reservation.served = True
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return reservation
