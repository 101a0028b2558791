"""Dashboard View — pure assembly of what the live dashboard shows for one query.

Invariants:
    - All inputs come from the snapshot + query + reference date (no IO)
    - Rows follow apply_query(); summary and counts always cover the whole snapshot
    - days_remaining is None for undated orders (FAR_FUTURE is never displayed)
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence

from printdesk.core.filter_sort import OrderQuery, apply_query
from printdesk.core.financials import (
    FinancialSummary, debt, percent_paid, summarize, count_by_status,
)
from printdesk.core.order import Order
from printdesk.core.urgency import classify_order


@dataclass(frozen=True)
class OrderRow:
    order: Order
    debt: float
    percent_paid: float
    is_urgent: bool
    days_remaining: int | None


@dataclass(frozen=True)
class DashboardView:
    rows: list[OrderRow]
    summary: FinancialSummary
    counts: dict[str, int]


def build_row(order: Order, now: date | datetime) -> OrderRow:
    urgency = classify_order(order, now)
    return OrderRow(
        order=order,
        debt=debt(order),
        percent_paid=percent_paid(order),
        is_urgent=urgency.is_urgent,
        days_remaining=int(urgency.days_remaining) if urgency.has_deadline else None,
    )


def build_dashboard(
    orders: Sequence[Order], query: OrderQuery, now: date | datetime,
) -> DashboardView:
    return DashboardView(
        rows=[build_row(o, now) for o in apply_query(orders, query)],
        summary=summarize(orders),
        counts=count_by_status(orders),
    )
