"""Order Entity — tests for input coercion, draft building and record reading.

Tests cover:
    - coerce_amount: "parse as number, default 0" leniency
    - build_insert_fields: name required, status Received, default delivery date
    - build_update_fields: empty date/description become None
    - order_from_record: lenient reading of backend rows
"""

from datetime import date, datetime

import pytest

from printdesk.core.domain_types import OrderStatus
from printdesk.core.errors import ValidationError
from printdesk.core.order import (
    OrderDraft, build_insert_fields, build_update_fields,
    coerce_amount, coerce_date, order_from_record,
)

TODAY = date(2026, 10, 19)


# ─── coerce_amount ───────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    ("150", 150.0),
    (" 42.5 ", 42.5),
    (200, 200.0),
    (12.75, 12.75),
    ("", 0.0),
    ("   ", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    ("12abc", 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
    ("-30", 0.0),
    (True, 0.0),
    ([], 0.0),
    ("1_000", 0.0),
    ("0x10", 16.0),
    ("0X1f", 31.0),
    ("0o17", 15.0),
    ("0b101", 5.0),
    ("-0x10", 0.0),
    ("0xzz", 0.0),
    ("0x" + "f" * 300, 0.0),
])
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


def test_coerce_date_accepts_iso_string_and_date():
    assert coerce_date("2026-10-25") == date(2026, 10, 25)
    assert coerce_date(date(2026, 10, 25)) == date(2026, 10, 25)


def test_coerce_date_truncates_datetime():
    assert coerce_date(datetime(2026, 10, 25, 23, 59)) == date(2026, 10, 25)


def test_coerce_date_empty_is_absent():
    assert coerce_date(None) is None
    assert coerce_date("") is None
    assert coerce_date("  ") is None


def test_coerce_date_rejects_garbage():
    with pytest.raises(ValidationError) as exc:
        coerce_date("next friday")
    assert exc.value.field == "delivery_date"


# ─── build_insert_fields ─────────────────────────────────────────

def test_insert_requires_name():
    with pytest.raises(ValidationError) as exc:
        build_insert_fields(OrderDraft(name=""), TODAY)
    assert exc.value.field == "name"
    assert exc.value.code == "VALIDATION_ERROR"


def test_insert_rejects_whitespace_name():
    with pytest.raises(ValidationError):
        build_insert_fields(OrderDraft(name="   "), TODAY)


def test_insert_defaults():
    fields = build_insert_fields(OrderDraft(name="Business cards"), TODAY)
    assert fields == {
        "name": "Business cards",
        "client": "",
        "total_price": 0.0,
        "deposit": 0.0,
        "delivery_date": "2026-10-26",
        "status": "Received",
        "description": None,
    }


def test_insert_coerces_amounts_and_keeps_given_date():
    draft = OrderDraft(
        name="Banner", client="Ana", total_price="120", deposit="x",
        delivery_date="2026-11-01", description="vinyl 2x1m",
    )
    fields = build_insert_fields(draft, TODAY)
    assert fields["total_price"] == 120.0
    assert fields["deposit"] == 0.0
    assert fields["delivery_date"] == "2026-11-01"
    assert fields["client"] == "Ana"
    assert fields["description"] == "vinyl 2x1m"


def test_insert_custom_lead_days():
    fields = build_insert_fields(OrderDraft(name="Flyers"), TODAY, lead_days=3)
    assert fields["delivery_date"] == "2026-10-22"


# ─── build_update_fields ─────────────────────────────────────────

def test_update_empty_date_and_description_become_absent():
    fields = build_update_fields(OrderDraft(
        name="Flyers", delivery_date="", description="",
    ))
    assert fields["delivery_date"] is None
    assert fields["description"] is None


def test_update_has_no_status():
    fields = build_update_fields(OrderDraft(name="Flyers"))
    assert "status" not in fields


def test_update_allows_overpayment():
    fields = build_update_fields(OrderDraft(
        name="Flyers", total_price="50", deposit="80",
    ))
    assert fields["total_price"] == 50.0
    assert fields["deposit"] == 80.0


def test_update_requires_name():
    with pytest.raises(ValidationError):
        build_update_fields(OrderDraft(name=""))


# ─── order_from_record ───────────────────────────────────────────

def test_order_from_full_record():
    order = order_from_record({
        "id": 7, "name": "Poster", "client": "Luis", "total_price": 90,
        "deposit": 30, "delivery_date": "2026-10-21", "status": "InProcess",
        "description": "A2 matte",
    })
    assert order.id == "7"
    assert order.total_price == 90.0
    assert order.deposit == 30.0
    assert order.delivery_date == date(2026, 10, 21)
    assert order.status is OrderStatus.IN_PROCESS
    assert order.description == "A2 matte"


def test_order_from_sparse_record_uses_defaults():
    order = order_from_record({"id": "x", "name": "Stickers"})
    assert order.client == ""
    assert order.total_price == 0.0
    assert order.deposit == 0.0
    assert order.delivery_date is None
    assert order.status is OrderStatus.RECEIVED
    assert order.description is None


def test_order_from_record_tolerates_bad_columns():
    order = order_from_record({
        "id": "x", "name": "Stickers", "total_price": None,
        "delivery_date": "soon", "status": "Shipped",
    })
    assert order.total_price == 0.0
    assert order.delivery_date is None
    assert order.status is OrderStatus.RECEIVED


@pytest.mark.parametrize("record", [
    {"name": "orphan"},
    {"id": None, "name": "orphan"},
    {"id": "", "name": "orphan"},
    "not-a-row",
])
def test_order_from_record_requires_id(record):
    with pytest.raises(ValidationError) as exc:
        order_from_record(record)
    assert exc.value.field == "id"
