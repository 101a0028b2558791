"""Financials — pure monetary aggregates and per-order payment progress.

Invariants:
    - All inputs are Orders (no IO, no DB); results depend only on the values, not their order
    - Empty collection -> all aggregates are 0
    - debt is exact total_price - deposit, negative on over-payment (never clamped)
    - percent_paid is 0 when total_price is 0, and may exceed 100 on over-payment

Design Decisions:
    - Pure functions, not methods on Order: Order is data, derived money is presentation
    - Aggregates cover the whole snapshot, independent of the active filter
"""

from dataclasses import dataclass
from typing import Iterable

from printdesk.core.domain_types import Money, Percent, OrderStatus, ALL_STATUSES
from printdesk.core.order import Order


@dataclass(frozen=True)
class FinancialSummary:
    total_sold: Money
    total_collected: Money
    outstanding: Money


def debt(order: Order) -> Money:
    return Money(order.total_price - order.deposit)


def percent_paid(order: Order) -> Percent:
    if order.total_price > 0:
        return Percent(order.deposit / order.total_price * 100)
    return Percent(0.0)


def total_sold(orders: Iterable[Order]) -> Money:
    return Money(sum((o.total_price for o in orders), 0.0))


def total_collected(orders: Iterable[Order]) -> Money:
    return Money(sum((o.deposit for o in orders), 0.0))


def outstanding(orders: Iterable[Order]) -> Money:
    orders = list(orders)
    return Money(total_sold(orders) - total_collected(orders))


def summarize(orders: Iterable[Order]) -> FinancialSummary:
    """Compute the three dashboard totals."""
    orders = list(orders)
    sold = total_sold(orders)
    collected = total_collected(orders)
    return FinancialSummary(
        total_sold=sold,
        total_collected=collected,
        outstanding=Money(sold - collected),
    )


def count_by_status(orders: Iterable[Order]) -> dict[str, int]:
    """Per-status tab counts, keyed by status value plus "all"."""
    counts = {ALL_STATUSES: 0}
    counts.update({s.value: 0 for s in OrderStatus})
    for order in orders:
        counts[ALL_STATUSES] += 1
        counts[order.status.value] += 1
    return counts
