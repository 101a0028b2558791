"""Boundary Protocols — contract between the core and the persistence collaborator.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Records cross the boundary as plain dicts (column name -> JSON value)
    - list_orders failures raise ConnectivityError; write failures raise
      BackendError (backend refused) or ConnectivityError (round trip failed)

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; the pure core never awaits
"""

from typing import Protocol

from printdesk.core.domain_types import OrderId


class OrderRepository(Protocol):
    """Contract for order persistence — implemented by infrastructure."""
    async def list_orders(self) -> list[dict]: ...
    async def insert(self, fields: dict) -> None: ...
    async def update_fields(self, order_id: OrderId, fields: dict) -> None: ...
    async def delete_by_id(self, order_id: OrderId) -> None: ...
