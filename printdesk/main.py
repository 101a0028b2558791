"""PrintDesk API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PrintDeskError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Missing connection parameters never crash startup: the OrderStore is built
      without a repository and the dashboard reports "not configured"

Design Decisions:
    - create_app() factory: repository and clock are injectable, so tests build
      an app around an in-memory fake
    - OrderStore built in create_app (not the lifespan) so it exists even when
      the ASGI lifespan is not run; the lifespan only logs, warms the snapshot
      and closes the HTTP client
"""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from printdesk.api.error_handlers import register_error_handlers
from printdesk.api.routes import health, orders
from printdesk.config import Settings, get_settings
from printdesk.core.errors import ConnectivityError
from printdesk.core.repository_protocols import OrderRepository
from printdesk.infrastructure.observability import setup_logging
from printdesk.infrastructure.rest_repository import RestOrderRepository
from printdesk.services.order_store import OrderStore

logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> RestOrderRepository | None:
    """Remote binding from settings, or None when connection params are missing."""
    if not settings.is_configured:
        logger.warning(
            "Order backend not configured (missing: "
            f"{', '.join(settings.missing_connection_params)})",
        )
        return None
    return RestOrderRepository(
        settings.supabase_url,
        settings.supabase_key,
        table=settings.orders_table,
        timeout_seconds=settings.request_timeout_seconds,
    )


def create_app(
    settings: Settings | None = None,
    repository: OrderRepository | None = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    settings = settings or get_settings()
    owns_repository = repository is None
    if repository is None:
        repository = build_repository(settings)

    store = OrderStore(
        repository,
        today=today,
        lead_days=settings.default_lead_days,
        strict_transitions=settings.strict_status_transitions,
        missing_config=settings.missing_connection_params,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        if store.configured:
            try:
                await store.load()
            except ConnectivityError as e:
                logger.warning(f"Initial order load failed: {e.message}")
        logger.info("PrintDesk API started")
        yield
        if owns_repository and isinstance(repository, RestOrderRepository):
            await repository.aclose()
        logger.info("PrintDesk API shutting down")

    app = FastAPI(title="PrintDesk API", version="1.0.0", lifespan=lifespan)
    app.state.order_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(orders.router)

    register_error_handlers(app)
    return app


app = create_app()
