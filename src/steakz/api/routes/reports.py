from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from steakz.core.deps import require_roles
from steakz.core.errors import storage_errors
from steakz.crud.reservation import count_reservations, get_reservations
from steakz.db.session import get_async_session
from steakz.models import User
from steakz.schemas.report import ReportSummary
from steakz.services.reports import summarize_all


router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=ReportSummary)
async def get_report_summary(
    db: AsyncSession = Depends(get_async_session),
    _: User = Depends(require_roles("reports:summary")),
):
    """
    Сводка за всё время:
    - totalReservations (кол-во броней)
    - revenue (сумма позиций по оплаченным броням)
    """
    with storage_errors("Could not generate report"):
        total = await count_reservations(db)
        paid = await get_reservations(db, is_paid=True)
    return summarize_all(total, paid)
