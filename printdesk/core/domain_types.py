"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - OrderId wraps the opaque identifier assigned by the persistence backend
    - Money is a non-negative float once it has passed coerce_amount()
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (order rows are JSON on the wire)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

OrderId = NewType("OrderId", str)


# ─── Value Types ─────────────────────────────────────────────────

Money = NewType("Money", float)           # >= 0 after coercion
Percent = NewType("Percent", float)       # 0–100 unless over-paid


# ─── Enums ───────────────────────────────────────────────────────

class OrderStatus(str, Enum):
    """Order lifecycle states — maps to the remote `status` column."""
    RECEIVED = "Received"
    IN_PROCESS = "InProcess"
    READY = "Ready"


class SortKey(str, Enum):
    """Columns the dashboard can be ordered by."""
    DELIVERY_DATE = "delivery_date"
    TOTAL_PRICE = "total_price"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Status filter value meaning "no status narrowing"
ALL_STATUSES = "all"


# ─── Lifecycle Constants ─────────────────────────────────────────

DEFAULT_LEAD_DAYS = 7        # intake delivery date = today + 7 when omitted
URGENCY_THRESHOLD_DAYS = 2   # unfinished and due within 2 days -> urgent
