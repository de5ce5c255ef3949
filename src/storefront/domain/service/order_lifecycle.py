"""Domain service: order lifecycle rules.

The fulfillment path is ``pending -> processing -> in_transit ->
delivered``, with ``cancelled`` reachable from any active status.
Delivery staff may also start delivery straight from ``pending``.

Who may take which step is a rule per role:

- ``customer``: no status writes at all.
- ``delivery``: ``pending -> in_transit`` and ``in_transit -> delivered``,
  on any active order (there is no assignment entity).
- ``admin``: any status from an active order. Leaving a terminal status
  is a manual correction and needs an explicit override.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.exceptions import InvalidTransition, PermissionDenied
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.principal import Role

S = OrderStatus

# Every legal forward edge of the lifecycle.
LIFECYCLE_EDGES: frozenset[tuple[OrderStatus, OrderStatus]] = frozenset({
    (S.PENDING, S.PROCESSING),
    (S.PENDING, S.IN_TRANSIT),
    (S.PROCESSING, S.IN_TRANSIT),
    (S.IN_TRANSIT, S.DELIVERED),
    (S.PENDING, S.CANCELLED),
    (S.PROCESSING, S.CANCELLED),
    (S.IN_TRANSIT, S.CANCELLED),
})


class TransitionRule(ABC):

    @abstractmethod
    def check(self, current: OrderStatus, target: OrderStatus, override: bool = False) -> None:
        """Raise InvalidTransition unless ``current -> target`` is allowed."""


@dataclass(frozen=True)
class NoTransitions(TransitionRule):
    role: Role

    def check(self, current: OrderStatus, target: OrderStatus, override: bool = False) -> None:
        if override:
            raise PermissionDenied(f"Role '{self.role.value}' cannot override order status")
        raise InvalidTransition(
            f"Role '{self.role.value}' cannot change order status "
            f"({current.value} -> {target.value})"
        )


@dataclass(frozen=True)
class AllowedEdges(TransitionRule):
    role: Role
    edges: frozenset[tuple[OrderStatus, OrderStatus]]

    def check(self, current: OrderStatus, target: OrderStatus, override: bool = False) -> None:
        if override:
            raise PermissionDenied(f"Role '{self.role.value}' cannot override order status")
        if (current, target) not in self.edges or (current, target) not in LIFECYCLE_EDGES:
            raise InvalidTransition(
                f"Cannot move order from {current.value} to {target.value} "
                f"as '{self.role.value}'"
            )


@dataclass(frozen=True)
class AnyToAny(TransitionRule):
    role: Role

    def check(self, current: OrderStatus, target: OrderStatus, override: bool = False) -> None:
        if current == target:
            raise InvalidTransition(f"Order is already {current.value}")
        if current.is_terminal and not override:
            raise InvalidTransition(
                f"Order is {current.value}; moving it to {target.value} "
                f"needs an explicit override"
            )


TRANSITION_RULES: dict[Role, TransitionRule] = {
    Role.CUSTOMER: NoTransitions(Role.CUSTOMER),
    Role.DELIVERY: AllowedEdges(
        Role.DELIVERY,
        frozenset({(S.PENDING, S.IN_TRANSIT), (S.IN_TRANSIT, S.DELIVERED)}),
    ),
    Role.ADMIN: AnyToAny(Role.ADMIN),
}


def check_transition(
    role: Role,
    current: OrderStatus,
    target: OrderStatus,
    override: bool = False,
) -> None:
    """Raise unless ``role`` may move an order from ``current`` to ``target``."""
    TRANSITION_RULES[role].check(current, target, override)


def next_statuses(role: Role, current: OrderStatus) -> list[OrderStatus]:
    """Statuses ``role`` may set from ``current`` without an override."""
    allowed = []
    for target in OrderStatus:
        try:
            check_transition(role, current, target)
        except InvalidTransition:
            continue
        allowed.append(target)
    return allowed
