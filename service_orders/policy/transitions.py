# service_orders/policy/transitions.py
"""
Authoritative status workflow for service orders.

Defines:
- The status transition graph
- Per-sector edge allow-lists (narrower than the graph)
- Transition validation for a given actor
- Introspection helpers used by the UI and API
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, List, Mapping, Tuple

from service_orders.choices import OrderStatus, Sector
from service_orders.policy.capabilities import can_edit
from service_orders.policy.context import IdentityContext, OrderSnapshot, coerce_status
from service_orders.policy.verdicts import TransitionResult, Verdict


Edge = Tuple[OrderStatus, OrderStatus]

S = OrderStatus


# ===============================================================
# Canonical graph
# ===============================================================

TRANSITIONS: Mapping[OrderStatus, FrozenSet[OrderStatus]] = {
    S.PENDING: frozenset({S.UNDER_REVIEW, S.REJECTED}),
    S.UNDER_REVIEW: frozenset({S.APPROVED, S.REJECTED, S.PLANNED}),
    S.APPROVED: frozenset({S.PLANNED, S.IN_PROGRESS}),
    S.PLANNED: frozenset({S.AWAITING_PROCUREMENT, S.IN_PROGRESS}),
    S.AWAITING_PROCUREMENT: frozenset({S.CONTRACTED, S.AWAITING_MATERIAL, S.CANCELLED}),
    S.CONTRACTED: frozenset({S.IN_PROGRESS, S.CANCELLED}),
    S.IN_PROGRESS: frozenset({S.COMPLETED, S.AWAITING_MATERIAL, S.CANCELLED}),
    S.AWAITING_MATERIAL: frozenset({S.IN_PROGRESS, S.CANCELLED}),
    S.COMPLETED: frozenset({S.APPROVED, S.CANCELLED}),
    S.CANCELLED: frozenset({S.PENDING}),
    S.REJECTED: frozenset({S.PENDING}),
}

EDGES: FrozenSet[Edge] = frozenset(
    (src, dst) for src, targets in TRANSITIONS.items() for dst in targets
)


# ===============================================================
# Sector allow-lists
# ===============================================================

CREW_EDGES: FrozenSet[Edge] = frozenset({
    (S.PENDING, S.UNDER_REVIEW),
    (S.IN_PROGRESS, S.COMPLETED),
    (S.IN_PROGRESS, S.AWAITING_MATERIAL),
    (S.REJECTED, S.PENDING),
})

# Coordinators drive most of the workflow: every edge leaving these sources.
# CONTRACTED is left to procurement.
PLANNING_SOURCES: FrozenSet[OrderStatus] = frozenset({
    S.PENDING,
    S.UNDER_REVIEW,
    S.APPROVED,
    S.REJECTED,
    S.PLANNED,
    S.AWAITING_PROCUREMENT,
    S.IN_PROGRESS,
    S.AWAITING_MATERIAL,
    S.COMPLETED,
    S.CANCELLED,
})

PLANNING_EDGES: FrozenSet[Edge] = frozenset(
    (src, dst) for (src, dst) in EDGES if src in PLANNING_SOURCES
)

PROCUREMENT_EDGES: FrozenSet[Edge] = frozenset({
    (S.AWAITING_PROCUREMENT, S.CONTRACTED),
    (S.AWAITING_PROCUREMENT, S.CANCELLED),
    (S.AWAITING_PROCUREMENT, S.AWAITING_MATERIAL),
    (S.CONTRACTED, S.IN_PROGRESS),
    (S.CONTRACTED, S.CANCELLED),
})

# Sectors absent from this table cannot move orders.
SECTOR_EDGES: Dict[Sector, FrozenSet[Edge]] = {
    Sector.CREW: CREW_EDGES,
    Sector.MAINTENANCE: PLANNING_EDGES,
    Sector.OPERATIONS: PLANNING_EDGES,
    Sector.PROCUREMENT: PROCUREMENT_EDGES,
}

ILLEGAL_TRANSITION = "illegal transition"
SECTOR_NOT_PERMITTED = "transition not permitted for your sector"


# ===============================================================
# Validation
# ===============================================================

def is_edge(current: Any, requested: Any) -> bool:
    return (coerce_status(current), coerce_status(requested)) in EDGES


def _order_key(status: OrderStatus) -> int:
    return list(OrderStatus).index(status)


def validate_transition(
    current: Any,
    requested: Any,
    identity: IdentityContext,
) -> TransitionResult:
    """
    Decide whether ``identity`` may move an order from ``current`` to ``requested``.

    Raises InvalidPolicyInput if either status is not a known OrderStatus.
    Resubmitting the unchanged status is always allowed. Administrators are
    bound by the graph only; everyone else also needs the edge in their
    sector's allow-list.
    """
    cur = coerce_status(current)
    tgt = coerce_status(requested)

    if cur == tgt:
        return Verdict.allow()

    if (cur, tgt) not in EDGES:
        return Verdict.deny(f"{ILLEGAL_TRANSITION}: {cur.label} -> {tgt.label}")

    if identity.is_admin:
        return Verdict.allow()

    if (cur, tgt) in SECTOR_EDGES.get(identity.sector, frozenset()):
        return Verdict.allow()

    return Verdict.deny(f"{SECTOR_NOT_PERMITTED}: {cur.label} -> {tgt.label}")


# ===============================================================
# Introspection helpers
# ===============================================================

def allowed_next_statuses(current: Any) -> List[OrderStatus]:
    """
    Graph successors only, independent of who asks.
    """
    cur = coerce_status(current)
    return sorted(TRANSITIONS.get(cur, frozenset()), key=_order_key)


def available_transitions(current: Any, identity: IdentityContext) -> List[OrderStatus]:
    """
    Successors this identity may actually select (status dropdowns).

    Empty when the identity cannot edit an order in ``current`` at all, since
    every status change goes through the edit check first.
    """
    cur = coerce_status(current)
    if not can_edit(identity, OrderSnapshot(id="", status=cur)):
        return []
    return [
        tgt
        for tgt in allowed_next_statuses(cur)
        if validate_transition(cur, tgt, identity).allowed
    ]


def _edge_list(edges: FrozenSet[Edge]) -> List[List[str]]:
    return sorted([src.value, dst.value] for (src, dst) in edges)


def workflow_definition() -> Dict[str, Any]:
    """
    Stable JSON-serializable definition for UI.
    """
    return {
        "statuses": [
            {"value": s.value, "label": s.label} for s in OrderStatus
        ],
        "transitions": {
            src.value: [t.value for t in allowed_next_statuses(src)]
            for src in OrderStatus
        },
        "sector_transitions": {
            sector.value: _edge_list(SECTOR_EDGES.get(sector, frozenset()))
            for sector in Sector
        },
    }


__all__ = [
    "TRANSITIONS",
    "EDGES",
    "CREW_EDGES",
    "PLANNING_SOURCES",
    "PLANNING_EDGES",
    "PROCUREMENT_EDGES",
    "SECTOR_EDGES",
    "ILLEGAL_TRANSITION",
    "SECTOR_NOT_PERMITTED",
    "is_edge",
    "validate_transition",
    "allowed_next_statuses",
    "available_transitions",
    "workflow_definition",
]
