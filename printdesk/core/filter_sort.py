"""Filter & Sort — the visible subset and ordering of the snapshot for one query.

Invariants:
    - Pure: output depends only on (orders, query); safe to recompute on every change
    - Status filter and text search are independent predicates (order of application is irrelevant)
    - Search is a case-insensitive substring match on name or client; empty search matches all
    - Sorting is stable, including descending (equal keys keep upstream order)
    - Undated orders are maximally late under the delivery_date key

Design Decisions:
    - Python's sorted(reverse=True) keeps equal elements in input order, so
      descending needs no separate stable-reverse pass
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from printdesk.core.domain_types import (
    OrderStatus, SortKey, SortDirection, ALL_STATUSES,
)
from printdesk.core.order import Order


@dataclass(frozen=True)
class OrderQuery:
    """Current dashboard query state."""
    status: OrderStatus | str = ALL_STATUSES
    search: str = ""
    sort_key: SortKey = SortKey.DELIVERY_DATE
    direction: SortDirection = SortDirection.ASC


# ─── Filtering ───────────────────────────────────────────────────

def matches_status(order: Order, status: OrderStatus | str) -> bool:
    if status == ALL_STATUSES:
        return True
    return order.status == status


def matches_search(order: Order, search: str) -> bool:
    if not search:
        return True
    needle = search.casefold()
    return needle in order.name.casefold() or needle in (order.client or "").casefold()


def filter_orders(
    orders: Iterable[Order], status: OrderStatus | str = ALL_STATUSES, search: str = "",
) -> list[Order]:
    return [
        o for o in orders
        if matches_status(o, status) and matches_search(o, search)
    ]


# ─── Sorting ─────────────────────────────────────────────────────

def _delivery_key(order: Order) -> tuple[bool, date]:
    # (undated, date): undated rows compare after every dated row
    return (order.delivery_date is None, order.delivery_date or date.min)


def _price_key(order: Order) -> float:
    return order.total_price


_SORT_KEYS = {
    SortKey.DELIVERY_DATE: _delivery_key,
    SortKey.TOTAL_PRICE: _price_key,
}


def sort_orders(
    orders: Iterable[Order],
    key: SortKey = SortKey.DELIVERY_DATE,
    direction: SortDirection = SortDirection.ASC,
) -> list[Order]:
    return sorted(
        orders,
        key=_SORT_KEYS[SortKey(key)],
        reverse=SortDirection(direction) == SortDirection.DESC,
    )


def apply_query(orders: Iterable[Order], query: OrderQuery) -> list[Order]:
    """Filter then sort, as displayed."""
    visible = filter_orders(orders, query.status, query.search)
    return sort_orders(visible, query.sort_key, query.direction)
