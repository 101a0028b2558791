"""Order Schemas — Pydantic models for the dashboard API boundary.

Invariants:
    - Request amount fields accept str | float | None; coercion to Money happens in core/order.py
    - name is not length-checked for emptiness here: core raises ValidationError so the
      error envelope is the same for API and programmatic callers
    - days_remaining is null for undated orders

Design Decisions:
    - Literal type for the status filter: Pydantic/FastAPI validate "all" plus the enum values
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from printdesk.core.dashboard import DashboardView, OrderRow
from printdesk.core.domain_types import OrderStatus
from printdesk.core.order import OrderDraft

StatusFilter = Literal["all", "Received", "InProcess", "Ready"]


class OrderFields(BaseModel):
    """User-editable order fields as typed into the intake/edit form."""
    name: str = Field("", max_length=500)
    client: str | None = Field(None, max_length=500)
    total_price: str | float | None = None
    deposit: str | float | None = None
    delivery_date: date | str | None = None
    description: str | None = Field(None, max_length=5000)

    def to_draft(self) -> OrderDraft:
        return OrderDraft(
            name=self.name,
            client=self.client,
            total_price=self.total_price,
            deposit=self.deposit,
            delivery_date=self.delivery_date,
            description=self.description,
        )


class OrderCreate(OrderFields):
    """Intake form. Omitted delivery_date defaults to today + lead days."""


class OrderUpdate(OrderFields):
    """Full-field edit. Empty delivery_date / description clear the field."""


class StatusChange(BaseModel):
    status: OrderStatus


class OrderView(BaseModel):
    id: str
    name: str
    client: str
    total_price: float
    deposit: float
    delivery_date: date | None
    status: OrderStatus
    description: str | None
    debt: float
    percent_paid: float
    is_urgent: bool
    days_remaining: int | None

    @classmethod
    def from_row(cls, row: OrderRow) -> "OrderView":
        o = row.order
        return cls(
            id=o.id,
            name=o.name,
            client=o.client,
            total_price=o.total_price,
            deposit=o.deposit,
            delivery_date=o.delivery_date,
            status=o.status,
            description=o.description,
            debt=row.debt,
            percent_paid=row.percent_paid,
            is_urgent=row.is_urgent,
            days_remaining=row.days_remaining,
        )


class SummaryView(BaseModel):
    total_sold: float = 0.0
    total_collected: float = 0.0
    outstanding: float = 0.0


class QueryView(BaseModel):
    status: StatusFilter = "all"
    q: str = ""
    sort: str = "delivery_date"
    direction: str = "asc"


class DashboardResponse(BaseModel):
    """The live dashboard: connection state, visible rows, totals and tab counts."""
    configured: bool
    connected: bool
    error: str | None = None
    loaded_at: datetime | None = None
    query: QueryView = QueryView()
    orders: list[OrderView] = []
    summary: SummaryView = SummaryView()
    counts: dict[str, int] = {}

    @classmethod
    def from_view(
        cls,
        view: DashboardView,
        *,
        configured: bool,
        connected: bool,
        error: str | None,
        loaded_at: datetime | None,
        query: QueryView,
    ) -> "DashboardResponse":
        return cls(
            configured=configured,
            connected=connected,
            error=error,
            loaded_at=loaded_at,
            query=query,
            orders=[OrderView.from_row(r) for r in view.rows],
            summary=SummaryView(
                total_sold=view.summary.total_sold,
                total_collected=view.summary.total_collected,
                outstanding=view.summary.outstanding,
            ),
            counts=view.counts,
        )
