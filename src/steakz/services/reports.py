"""
Отчёты по броням.

Функции чистые: принимают уже загруженный снимок броней (с позициями заказа)
и ничего не запрашивают повторно.
"""

from collections import Counter
from decimal import Decimal
from typing import Iterable, List

TOP_DISHES_LIMIT = 5


def _price(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def paid_revenue(reservations: Iterable) -> Decimal:
    """Выручка считается по брони целиком: неоплаченные дают ноль."""
    return sum(
        (_price(order.price) for r in reservations if r.is_paid for order in r.orders),
        Decimal("0"),
    )


def most_ordered_dishes(reservations: Iterable, limit: int = TOP_DISHES_LIMIT) -> List[dict]:
    """
    Частота блюд по всем позициям (оплата не важна), по убыванию.
    При равенстве порядок первого появления.
    """
    counts = Counter(order.menu_item for r in reservations for order in r.orders)
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [{"dish": dish, "count": count} for dish, count in ranked[:limit]]


def build_report(reservations) -> dict:
    snapshot = list(reservations)
    return {
        "total_orders": len(snapshot),
        "total_revenue": paid_revenue(snapshot),
        "most_ordered_dishes": most_ordered_dishes(snapshot),
    }


def summarize_all(total_reservations: int, paid_reservations) -> dict:
    """Сводка за всё время: число броней и выручка по оплаченным."""
    return {
        "total_reservations": total_reservations,
        "revenue": paid_revenue(paid_reservations),
    }
