"""Status Transition — order lifecycle progression Received -> InProcess -> Ready.

Invariants:
    - Any status may be assigned from any other unless strict mode is on
    - Strict mode rejects only backward moves; re-assigning the same status is allowed
    - Ready is terminal for the happy path (next_status returns None)

Design Decisions:
    - Forward order is a UI convention, so enforcement is opt-in
      (setting strict_status_transitions, default off)
"""

from printdesk.core.domain_types import OrderStatus
from printdesk.core.errors import StatusTransitionError

INITIAL_STATUS = OrderStatus.RECEIVED

LIFECYCLE: tuple[OrderStatus, ...] = (
    OrderStatus.RECEIVED,
    OrderStatus.IN_PROCESS,
    OrderStatus.READY,
)


def stage(status: OrderStatus) -> int:
    return LIFECYCLE.index(OrderStatus(status))


def next_status(status: OrderStatus) -> OrderStatus | None:
    """Next step on the happy path, or None from Ready."""
    idx = stage(status)
    if idx + 1 < len(LIFECYCLE):
        return LIFECYCLE[idx + 1]
    return None


def is_forward(current: OrderStatus, requested: OrderStatus) -> bool:
    return stage(requested) >= stage(current)


def check_transition(
    current: OrderStatus, requested: OrderStatus, strict: bool = False,
) -> OrderStatus:
    """Return the requested status, or raise StatusTransitionError on a backward move in strict mode."""
    requested = OrderStatus(requested)
    if strict and not is_forward(current, requested):
        raise StatusTransitionError(OrderStatus(current).value, requested.value)
    return requested
