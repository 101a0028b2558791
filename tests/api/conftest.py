"""API test fixtures — FastAPI app built around an in-memory repository.

Invariants:
    - Every test gets a fresh app + FakeOrderRepository (no shared OrderStore)
    - "today" pinned to 2026-10-19
    - ASGITransport does not run the lifespan: the first GET performs the initial load
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from printdesk.config import Settings
from printdesk.main import create_app
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
        {"id": "nodate", "name": "Stickers", "client": "",
         "total_price": 30, "deposit": 10, "delivery_date": None,
         "status": "Ready", "description": None},
    ])


@pytest.fixture
def settings():
    return Settings(supabase_url="https://demo.supabase.co", supabase_key="anon-test-key")


@pytest.fixture
def app(settings, repository):
    return create_app(settings, repository=repository, today=lambda: TODAY)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def unconfigured_client():
    app = create_app(Settings(supabase_url="", supabase_key=""))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
