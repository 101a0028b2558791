"""Orders — live dashboard view and the order mutations behind it.

Invariants:
    - Routes never contain business rules: they call OrderStore and core/dashboard.py
    - GET never fails on configuration or connectivity: it renders the state
      (configured / connected / error) next to the last good snapshot
    - Mutations surface errors via the global PrintDeskError handler and, on
      success, return the freshly reloaded dashboard
    - Delete requires ?confirm=true

Design Decisions:
    - OrderStore lives on app.state (built by create_app), fetched per request via get_store
    - First GET performs the initial load when the lifespan load did not happen or failed
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status

from printdesk.core.dashboard import build_dashboard
from printdesk.core.domain_types import OrderId, SortKey, SortDirection
from printdesk.core.errors import ConfigurationError, ConnectivityError
from printdesk.core.filter_sort import OrderQuery
from printdesk.schemas.order import (
    DashboardResponse, OrderCreate, OrderUpdate, QueryView, StatusChange,
    StatusFilter,
)
from printdesk.services.order_store import OrderStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


def get_store(request: Request) -> OrderStore:
    return request.app.state.order_store


def _render(
    store: OrderStore, query: QueryView, error: str | None = None,
) -> DashboardResponse:
    view = build_dashboard(
        store.snapshot,
        OrderQuery(
            status=query.status,
            search=query.q,
            sort_key=SortKey(query.sort),
            direction=SortDirection(query.direction),
        ),
        store.today(),
    )
    return DashboardResponse.from_view(
        view,
        configured=store.configured,
        connected=store.connected,
        error=error or store.last_error,
        loaded_at=store.loaded_at,
        query=query,
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    status_filter: StatusFilter = Query("all", alias="status"),
    q: str = Query("", max_length=200),
    sort: SortKey = Query(SortKey.DELIVERY_DATE),
    direction: SortDirection = Query(SortDirection.ASC),
    store: OrderStore = Depends(get_store),
):
    """Dashboard for the current query: rows, totals, per-status counts."""
    query = QueryView(
        status=status_filter, q=q, sort=sort.value, direction=direction.value,
    )
    if not store.configured:
        error = ConfigurationError(store.missing_config).message
        return _render(store, query, error)
    if store.loaded_at is None:
        try:
            await store.load()
        except ConnectivityError as e:
            return _render(store, query, e.message)
    return _render(store, query)


@router.post("/refresh", response_model=DashboardResponse)
async def refresh(store: OrderStore = Depends(get_store)):
    """Manual reload — the retry path after a connectivity failure."""
    await store.load()
    return _render(store, QueryView())


@router.post(
    "", response_model=DashboardResponse, status_code=status.HTTP_201_CREATED,
)
async def create_order(body: OrderCreate, store: OrderStore = Depends(get_store)):
    await store.create(body.to_draft())
    return _render(store, QueryView())


@router.put("/{order_id}", response_model=DashboardResponse)
async def update_order(
    order_id: str, body: OrderUpdate, store: OrderStore = Depends(get_store),
):
    await store.update(OrderId(order_id), body.to_draft())
    return _render(store, QueryView())


@router.patch("/{order_id}/status", response_model=DashboardResponse)
async def change_status(
    order_id: str, body: StatusChange, store: OrderStore = Depends(get_store),
):
    await store.set_status(OrderId(order_id), body.status)
    return _render(store, QueryView())


@router.post("/{order_id}/mark-paid", response_model=DashboardResponse)
async def mark_paid(order_id: str, store: OrderStore = Depends(get_store)):
    """Settle the order's debt using its total price from the current snapshot."""
    await store.mark_paid(OrderId(order_id))
    return _render(store, QueryView())


@router.delete("/{order_id}", response_model=DashboardResponse)
async def delete_order(
    order_id: str,
    confirm: bool = Query(False),
    store: OrderStore = Depends(get_store),
):
    await store.delete(OrderId(order_id), confirmed=confirm)
    return _render(store, QueryView())
