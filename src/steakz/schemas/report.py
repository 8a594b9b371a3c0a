from typing import List

from .base import CamelModel


class DishCount(CamelModel):
    dish: str
    count: int


class DayReport(CamelModel):
    total_orders: int
    total_revenue: float
    most_ordered_dishes: List[DishCount]


class ReportSummary(CamelModel):
    total_reservations: int
    revenue: float
