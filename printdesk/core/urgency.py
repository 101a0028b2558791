"""Urgency — day-based deadline signal from delivery date, status and a reference "now".

Invariants:
    - "now" is truncated to a calendar date before subtraction (time of day never matters)
    - Ready orders are never urgent, whatever their date
    - Overdue orders (negative days) count as urgent
    - Undated orders get FAR_FUTURE, which only ever feeds sorting, never display
"""

import math
from dataclasses import dataclass
from datetime import date, datetime

from printdesk.core.domain_types import OrderStatus, URGENCY_THRESHOLD_DAYS
from printdesk.core.order import Order

FAR_FUTURE = math.inf


@dataclass(frozen=True)
class Urgency:
    is_urgent: bool
    days_remaining: int | float  # int, or FAR_FUTURE when undated

    @property
    def has_deadline(self) -> bool:
        return self.days_remaining != FAR_FUTURE


def to_calendar_date(now: date | datetime) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def days_until(delivery_date: date | None, now: date | datetime) -> int | float:
    if delivery_date is None:
        return FAR_FUTURE
    return (delivery_date - to_calendar_date(now)).days


def classify_urgency(
    delivery_date: date | None, status: OrderStatus, now: date | datetime,
) -> Urgency:
    days = days_until(delivery_date, now)
    urgent = (
        delivery_date is not None
        and status != OrderStatus.READY
        and days <= URGENCY_THRESHOLD_DAYS
    )
    return Urgency(is_urgent=urgent, days_remaining=days)


def classify_order(order: Order, now: date | datetime) -> Urgency:
    return classify_urgency(order.delivery_date, order.status, now)
