"""REST Order Repository — OrderRepository bound to a PostgREST (Supabase) table over httpx.

Invariants:
    - Transport failures and timeouts map to ConnectivityError (core/errors.py)
    - list_orders: any failure is a ConnectivityError (the dashboard cannot refresh)
    - Writes: HTTP >= 400 maps to BackendError carrying the backend's message verbatim
    - No automatic retries; the caller decides whether to retry

Design Decisions:
    - One AsyncClient per repository, opened in the FastAPI lifespan and closed on shutdown
    - Prefer: return=minimal on writes; the store reloads the full collection anyway
    - Rows ordered server-side by delivery_date ascending, nulls last
"""

import logging

import httpx

from printdesk.core.domain_types import OrderId
from printdesk.core.errors import BackendError, ConnectivityError, ErrorContext

logger = logging.getLogger(__name__)

_LIST_ORDER = "delivery_date.asc.nullslast"


def _error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the backend's own error text."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error", "detail"):
            if body.get(key):
                return str(body[key])
    return str(body) if body else f"HTTP {response.status_code}"


class RestOrderRepository:
    """Async client for the remote orders table."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "orders",
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.table = table
        self.client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    @property
    def _path(self) -> str:
        return f"/{self.table}"

    async def list_orders(self) -> list[dict]:
        try:
            response = await self.client.get(
                self._path, params={"select": "*", "order": _LIST_ORDER},
            )
        except httpx.HTTPError as e:
            raise ConnectivityError(
                f"Could not reach order backend: {e}", "list",
            ) from e
        if response.status_code >= 400:
            raise ConnectivityError(_error_message(response), "list")
        try:
            rows = response.json()
        except ValueError as e:
            raise ConnectivityError(
                f"Order backend returned invalid JSON: {e}", "list",
            ) from e
        if not isinstance(rows, list):
            raise ConnectivityError(
                f"Unexpected list response: {type(rows).__name__}", "list",
            )
        return rows

    async def insert(self, fields: dict) -> None:
        await self._write("insert", "POST", fields=fields)

    async def update_fields(self, order_id: OrderId, fields: dict) -> None:
        await self._write("update", "PATCH", order_id=order_id, fields=fields)

    async def delete_by_id(self, order_id: OrderId) -> None:
        await self._write("delete", "DELETE", order_id=order_id)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _write(
        self,
        operation: str,
        method: str,
        order_id: OrderId | None = None,
        fields: dict | None = None,
    ) -> None:
        ctx = ErrorContext(order_id=order_id)
        params = {"id": f"eq.{order_id}"} if order_id is not None else None
        try:
            response = await self.client.request(
                method, self._path, params=params, json=fields,
                headers={"Prefer": "return=minimal"},
            )
        except httpx.HTTPError as e:
            raise ConnectivityError(
                f"Could not reach order backend: {e}", operation, ctx,
            ) from e
        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                f"Backend rejected {operation}: {message}",
                extra={"order_id": order_id, "operation": operation},
            )
            raise BackendError(message, operation, ctx)
