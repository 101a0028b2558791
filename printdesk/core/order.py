"""Order Entity — the tracked print job, plus the input coercion rules for it.

Invariants:
    - Order is immutable once built; OrderStore replaces the whole snapshot on reload
    - Monetary input is "parse as number, default 0 on failure" (never rejected)
    - name is the only required field; an empty name raises ValidationError
    - New orders always start as Received with a delivery date (today + lead days if omitted)
    - On edit, empty delivery date / description become absent (None), never ""

Design Decisions:
    - Records (dicts) at the repository boundary, Order dataclass inside the core:
      the backend's row shape never leaks past order_from_record()
    - Dates travel to the backend as ISO strings (calendar dates, no time)
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from printdesk.core.domain_types import (
    OrderId, Money, OrderStatus, DEFAULT_LEAD_DAYS,
)
from printdesk.core.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Order:
    """One customer job as last read from the backend."""

    id: OrderId
    name: str
    client: str = ""
    total_price: Money = Money(0.0)
    deposit: Money = Money(0.0)
    delivery_date: date | None = None
    status: OrderStatus = OrderStatus.RECEIVED
    description: str | None = None


@dataclass
class OrderDraft:
    """User-entered fields for intake or a full edit, before coercion.

    Amounts and the delivery date are accepted in whatever shape the form
    produced (str, number, None); build_insert_fields / build_update_fields
    normalize them.
    """

    name: str = ""
    client: str | None = ""
    total_price: Any = None
    deposit: Any = None
    delivery_date: date | str | None = None
    description: str | None = None


# ─── Coercion ────────────────────────────────────────────────────

_RADIX_PREFIXES = ("0x", "0o", "0b")


def _parse_amount_text(text: str) -> float:
    """Form-field numbers: unsigned 0x/0o/0b literals allowed, digit separators not."""
    text = text.strip()
    if not text:
        return 0.0
    if "_" in text:
        raise ValueError(f"digit separators not accepted: {text!r}")
    if text[:2].lower() in _RADIX_PREFIXES:
        return float(int(text, 0))
    return float(text)


def coerce_amount(value: Any) -> Money:
    """Parse a monetary input; anything unparseable, non-finite or negative becomes 0."""
    if value is None or isinstance(value, bool):
        return Money(0.0)
    try:
        number = _parse_amount_text(value) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return Money(0.0)
    if not math.isfinite(number) or number < 0:
        return Money(0.0)
    return Money(number)


def coerce_date(value: date | str | None, field: str = "delivery_date") -> date | None:
    """Normalize a date input. Empty means absent; garbage is a ValidationError."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)", field)
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)", field)


def _clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require_name(name: str | None) -> str:
    cleaned = _clean_text(name)
    if not cleaned:
        raise ValidationError("Order name is required", "name")
    return cleaned


# ─── Draft -> backend fields ─────────────────────────────────────

def build_insert_fields(
    draft: OrderDraft, today: date, lead_days: int = DEFAULT_LEAD_DAYS,
) -> dict:
    """Fields for a new order. Raises ValidationError before any IO if name is empty."""
    name = _require_name(draft.name)
    delivery = coerce_date(draft.delivery_date)
    if delivery is None:
        delivery = today + timedelta(days=lead_days)
    return {
        "name": name,
        "client": _clean_text(draft.client) or "",
        "total_price": coerce_amount(draft.total_price),
        "deposit": coerce_amount(draft.deposit),
        "delivery_date": delivery.isoformat(),
        "status": OrderStatus.RECEIVED.value,
        "description": _clean_text(draft.description),
    }


def build_update_fields(draft: OrderDraft) -> dict:
    """Fields for a full edit. Status is not part of an edit."""
    name = _require_name(draft.name)
    delivery = coerce_date(draft.delivery_date)
    return {
        "name": name,
        "client": _clean_text(draft.client) or "",
        "total_price": coerce_amount(draft.total_price),
        "deposit": coerce_amount(draft.deposit),
        "delivery_date": delivery.isoformat() if delivery else None,
        "description": _clean_text(draft.description),
    }


# ─── Backend record -> Order ─────────────────────────────────────

def _record_status(value: Any) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        logger.warning(f"Unknown order status {value!r}, reading as Received")
        return OrderStatus.RECEIVED


def _record_date(value: Any) -> date | None:
    try:
        return coerce_date(value)
    except ValidationError:
        logger.warning(f"Unparseable delivery_date {value!r}, reading as absent")
        return None


def order_from_record(record: dict) -> Order:
    """Build an Order from a backend row. Lenient: bad columns fall back to defaults.

    A row without an id cannot be addressed by any mutation: ValidationError.
    """
    if not isinstance(record, dict) or record.get("id") in (None, ""):
        raise ValidationError("Order row has no id", "id")
    return Order(
        id=OrderId(str(record["id"])),
        name=record.get("name") or "",
        client=record.get("client") or "",
        total_price=coerce_amount(record.get("total_price")),
        deposit=coerce_amount(record.get("deposit")),
        delivery_date=_record_date(record.get("delivery_date")),
        status=_record_status(record.get("status")),
        description=record.get("description") or None,
    )
