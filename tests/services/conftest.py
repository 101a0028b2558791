"""Service test fixtures — in-memory repository and an OrderStore with a fixed clock.

Invariants:
    - Every test gets a fresh FakeOrderRepository
    - "today" is pinned to 2026-10-19 so default delivery dates are deterministic
"""

from datetime import date

import pytest

from printdesk.services.order_store import OrderStore
from tests.services.fake_repository import FakeOrderRepository

TODAY = date(2026, 10, 19)


@pytest.fixture
def repository():
    return FakeOrderRepository([
        {"id": "late", "name": "Banner", "client": "Imprenta Sur",
         "total_price": 100, "deposit": 0, "delivery_date": "2026-10-25",
         "status": "Received", "description": None},
        {"id": "early", "name": "Flyers", "client": "Ana",
         "total_price": 50, "deposit": 50, "delivery_date": "2026-10-20",
         "status": "InProcess", "description": "A5 glossy"},
    ])


@pytest.fixture
def store(repository):
    return OrderStore(repository, today=lambda: TODAY)
