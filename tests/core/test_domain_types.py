"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - OrderStatus has exactly the three lifecycle states with their wire values
    - Enums compare equal to their string values
"""

from printdesk.core.domain_types import (
    OrderId, Money, Percent, OrderStatus, SortKey, SortDirection,
    ALL_STATUSES, DEFAULT_LEAD_DAYS, URGENCY_THRESHOLD_DAYS,
)


def test_identity_and_value_types_wrap_primitives():
    assert OrderId("ord-1") == "ord-1"
    assert Money(12.5) == 12.5
    assert Percent(50.0) == 50.0


def test_order_status_has_three_states():
    assert [s.value for s in OrderStatus] == ["Received", "InProcess", "Ready"]


def test_enums_compare_to_wire_values():
    assert OrderStatus.IN_PROCESS == "InProcess"
    assert SortKey("total_price") is SortKey.TOTAL_PRICE
    assert SortDirection("desc") is SortDirection.DESC


def test_constants():
    assert ALL_STATUSES == "all"
    assert DEFAULT_LEAD_DAYS == 7
    assert URGENCY_THRESHOLD_DAYS == 2
