"""Order Store — the session's authoritative order snapshot and the only writer of it.

Invariants:
    - Every successful mutation is followed by a full load(); no local patching
    - A failed load keeps the previous snapshot (empty on first load) and marks the store disconnected
    - A failed mutation re-raises without reloading and without touching the snapshot
    - ValidationError is raised before any repository call
    - Backend rows without an id are skipped with a warning, the rest still load
    - Without a repository (not configured) every operation raises ConfigurationError

Design Decisions:
    - Repository injected through the constructor: built once in the FastAPI
      lifespan, replaced by an in-memory fake in tests
    - No request-level lock: concurrent writes race at the backend and the
      later-completing load() wins
    - Snapshot kept date-ascending (undated last) regardless of backend ordering
"""

import logging
from datetime import date, datetime, timezone
from typing import Awaitable, Callable

from printdesk.core.domain_types import (
    OrderId, OrderStatus, SortKey, SortDirection, DEFAULT_LEAD_DAYS,
)
from printdesk.core.errors import (
    BackendError, ConfigurationError, ConfirmationRequiredError,
    ConnectivityError, ErrorContext, ResourceNotFoundError, ValidationError,
)
from printdesk.core.filter_sort import sort_orders
from printdesk.core.order import (
    Order, OrderDraft, build_insert_fields, build_update_fields,
    coerce_amount, order_from_record,
)
from printdesk.core.repository_protocols import OrderRepository
from printdesk.core.status_transition import check_transition

logger = logging.getLogger(__name__)


class OrderStore:
    """Holds the last-loaded snapshot and routes all writes through the repository."""

    def __init__(
        self,
        repository: OrderRepository | None,
        *,
        today: Callable[[], date] = date.today,
        lead_days: int = DEFAULT_LEAD_DAYS,
        strict_transitions: bool = False,
        missing_config: list[str] | None = None,
    ):
        self._repository = repository
        self._today = today
        self._lead_days = lead_days
        self._strict = strict_transitions
        self._missing_config = missing_config or []
        self._snapshot: tuple[Order, ...] = ()
        self._connected = False
        self._last_error: str | None = None
        self._loaded_at: datetime | None = None

    # ─── Read side ───────────────────────────────────────────────

    @property
    def configured(self) -> bool:
        return self._repository is not None

    @property
    def missing_config(self) -> list[str]:
        return list(self._missing_config) or ["order backend"]

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def snapshot(self) -> tuple[Order, ...]:
        return self._snapshot

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def loaded_at(self) -> datetime | None:
        return self._loaded_at

    def today(self) -> date:
        return self._today()

    def find(self, order_id: str) -> Order:
        for order in self._snapshot:
            if order.id == order_id:
                return order
        raise ResourceNotFoundError(
            "Order", order_id, ErrorContext(order_id=order_id),
        )

    # ─── Load ────────────────────────────────────────────────────

    async def load(self) -> tuple[Order, ...]:
        """Replace the snapshot with the backend's full collection."""
        repository = self._require_repository()
        try:
            records = await repository.list_orders()
        except ConnectivityError as e:
            self._connected = False
            self._last_error = e.message
            logger.warning(
                f"Order load failed, keeping {len(self._snapshot)} cached orders: {e.message}",
                extra={"error_code": e.code, "operation": "list"},
            )
            raise
        orders = []
        for record in records:
            try:
                orders.append(order_from_record(record))
            except ValidationError as e:
                logger.warning(
                    f"Skipping backend row: {e.message}",
                    extra={"error_code": e.code, "operation": "list"},
                )
        self._snapshot = tuple(
            sort_orders(orders, SortKey.DELIVERY_DATE, SortDirection.ASC),
        )
        self._connected = True
        self._last_error = None
        self._loaded_at = datetime.now(timezone.utc)
        logger.debug(f"Loaded {len(self._snapshot)} orders")
        return self._snapshot

    # ─── Mutations ───────────────────────────────────────────────

    async def create(self, draft: OrderDraft) -> tuple[Order, ...]:
        """Intake a new order (status Received). Empty name -> ValidationError, no IO."""
        repository = self._require_repository()
        fields = build_insert_fields(draft, self.today(), self._lead_days)
        await self._write("insert", repository.insert(fields))
        logger.info(f"Order created: {fields['name']}")
        return await self.load()

    async def set_status(
        self, order_id: OrderId, new_status: OrderStatus,
    ) -> tuple[Order, ...]:
        """Assign a status; backward moves are only rejected in strict mode."""
        repository = self._require_repository()
        if self._strict:
            current = self.find(order_id).status
            new_status = check_transition(current, new_status, strict=True)
        else:
            new_status = OrderStatus(new_status)
        await self._write(
            "update_status",
            repository.update_fields(order_id, {"status": new_status.value}),
            order_id,
        )
        logger.info(
            f"Order status set to {new_status.value}",
            extra={"order_id": order_id, "status": new_status.value},
        )
        return await self.load()

    async def mark_paid(
        self, order_id: OrderId, total_price: float | None = None,
    ) -> tuple[Order, ...]:
        """Full settlement shortcut: deposit = total_price.

        Without an explicit total the order's total_price from the snapshot is used.
        """
        repository = self._require_repository()
        if total_price is None:
            total_price = self.find(order_id).total_price
        fields = {"deposit": coerce_amount(total_price)}
        await self._write(
            "mark_paid", repository.update_fields(order_id, fields), order_id,
        )
        logger.info("Order marked paid", extra={"order_id": order_id})
        return await self.load()

    async def update(
        self, order_id: OrderId, draft: OrderDraft,
    ) -> tuple[Order, ...]:
        """Full-field edit (everything except status)."""
        repository = self._require_repository()
        fields = build_update_fields(draft)
        await self._write(
            "update", repository.update_fields(order_id, fields), order_id,
        )
        logger.info("Order updated", extra={"order_id": order_id})
        return await self.load()

    async def delete(
        self, order_id: OrderId, confirmed: bool = False,
    ) -> tuple[Order, ...]:
        """Remove an order. The caller must have confirmed the deletion."""
        repository = self._require_repository()
        if not confirmed:
            raise ConfirmationRequiredError(order_id)
        await self._write("delete", repository.delete_by_id(order_id), order_id)
        logger.info("Order deleted", extra={"order_id": order_id})
        return await self.load()

    # ─── Helpers ─────────────────────────────────────────────────

    def _require_repository(self) -> OrderRepository:
        if self._repository is None:
            raise ConfigurationError(self.missing_config)
        return self._repository

    async def _write(
        self, operation: str, call: Awaitable[None], order_id: str | None = None,
    ) -> None:
        try:
            await call
        except (BackendError, ConnectivityError) as e:
            if isinstance(e, ConnectivityError):
                self._connected = False
            self._last_error = e.message
            e.context.order_id = e.context.order_id or order_id
            logger.error(
                f"Order {operation} failed: {e.message}",
                extra={"error_code": e.code, "order_id": order_id, "operation": operation},
            )
            raise
