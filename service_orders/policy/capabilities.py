# service_orders/policy/capabilities.py
"""
Capability matrix for service orders.

Answers, per (role, sector) and order status, whether a user may view,
create, edit or delete an order and which restricted fields they may change.

Every rule is an allow-list. A role or sector that is not wired into a rule
is denied, and every predicate here returns a bool without raising.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, NamedTuple, Optional

from service_orders.choices import FieldName, OrderStatus, Role, Sector
from service_orders.policy.context import IdentityContext, OrderSnapshot, try_choice


# ===============================================================
# Role and sector groups
# ===============================================================

BUYER_ROLES: FrozenSet[Role] = frozenset({
    Role.BUYER_JUNIOR,
    Role.BUYER_MID,
    Role.BUYER_SENIOR,
})

CREW_RANKS: FrozenSet[Role] = frozenset({
    Role.COMMANDING_OFFICER,
    Role.FIRST_OFFICER,
    Role.NAVIGATION_OFFICER,
    Role.CHIEF_ENGINEER,
    Role.ASSISTANT_CHIEF_ENGINEER,
    Role.MACHINERY_OFFICER,
})

PLANNING_ROLES: FrozenSet[Role] = frozenset({
    Role.MANAGER,
    Role.SUPERVISOR,
    Role.COORDINATOR,
})

OPERATIONAL_ROLES: FrozenSet[Role] = PLANNING_ROLES | BUYER_ROLES | CREW_RANKS

RECOGNIZED_SECTORS: FrozenSet[Sector] = frozenset({
    Sector.ADMINISTRATION,
    Sector.MAINTENANCE,
    Sector.OPERATIONS,
    Sector.PROCUREMENT,
    Sector.CREW,
    Sector.WAREHOUSE,
    Sector.HR,
    Sector.IT,
    Sector.UNDEFINED,
})

CREATOR_SECTORS: FrozenSet[Sector] = frozenset({
    Sector.MAINTENANCE,
    Sector.OPERATIONS,
    Sector.CREW,
})


# ===============================================================
# Edit rules per sector
# ===============================================================

class EditRule(NamedTuple):
    roles: FrozenSet[Role]
    statuses: FrozenSet[OrderStatus]


_CREW_EDIT = EditRule(
    roles=CREW_RANKS,
    statuses=frozenset({
        OrderStatus.PENDING,
        OrderStatus.REJECTED,
        OrderStatus.IN_PROGRESS,
    }),
)

_PLANNING_EDIT = EditRule(
    roles=PLANNING_ROLES,
    statuses=frozenset({
        OrderStatus.PENDING,
        OrderStatus.UNDER_REVIEW,
        OrderStatus.APPROVED,
        OrderStatus.REJECTED,
        OrderStatus.PLANNED,
        OrderStatus.AWAITING_PROCUREMENT,
    }),
)

_PROCUREMENT_EDIT = EditRule(
    roles=BUYER_ROLES,
    statuses=frozenset({
        OrderStatus.AWAITING_PROCUREMENT,
        OrderStatus.CONTRACTED,
        OrderStatus.IN_PROGRESS,
    }),
)

# Sectors absent from this table cannot edit.
EDIT_RULES: Dict[Sector, EditRule] = {
    Sector.CREW: _CREW_EDIT,
    Sector.MAINTENANCE: _PLANNING_EDIT,
    Sector.OPERATIONS: _PLANNING_EDIT,
    Sector.PROCUREMENT: _PROCUREMENT_EDIT,
}


# ===============================================================
# Field-level rules
# ===============================================================

class FieldRule(NamedTuple):
    roles: FrozenSet[Role]
    sectors: FrozenSet[Sector]


_PLANNING_FIELD = FieldRule(
    roles=frozenset({Role.COORDINATOR}),
    sectors=frozenset({Sector.OPERATIONS, Sector.MAINTENANCE}),
)

_PROCUREMENT_FIELD = FieldRule(
    roles=BUYER_ROLES,
    sectors=frozenset({Sector.PROCUREMENT}),
)

FIELD_RULES: Dict[FieldName, FieldRule] = {
    FieldName.PLANNED_START_DATE: _PLANNING_FIELD,
    FieldName.PLANNED_END_DATE: _PLANNING_FIELD,
    FieldName.SOLUTION_TYPE: _PLANNING_FIELD,
    FieldName.RESPONSIBLE_CREW: _PLANNING_FIELD,
    FieldName.COORDINATOR_NOTES: _PLANNING_FIELD,
    FieldName.CONTRACTED_COMPANY: _PROCUREMENT_FIELD,
    FieldName.CONTRACT_DATE: _PROCUREMENT_FIELD,
    FieldName.SERVICE_ORDER_COST: _PROCUREMENT_FIELD,
    FieldName.SUPPLIER_NOTES: _PROCUREMENT_FIELD,
}


def _field_name(value: Any) -> Optional[FieldName]:
    if isinstance(value, FieldName):
        return value
    try:
        return FieldName(str(value or "").strip())
    except ValueError:
        return None


# ===============================================================
# Predicates
# ===============================================================

def can_view(identity: IdentityContext) -> bool:
    if identity.is_admin:
        return True
    return identity.role in OPERATIONAL_ROLES and identity.sector in RECOGNIZED_SECTORS


def can_create(identity: IdentityContext) -> bool:
    if identity.is_admin:
        return True
    return identity.sector in CREATOR_SECTORS


def can_edit(identity: IdentityContext, order: OrderSnapshot) -> bool:
    """
    Crew edits do not depend on who created the order.
    """
    if identity.is_admin:
        return True

    rule = EDIT_RULES.get(identity.sector)
    if rule is None:
        return False
    return identity.role in rule.roles and order.status in rule.statuses


def can_delete(identity: IdentityContext) -> bool:
    return identity.is_admin


def can_manage_users(identity: IdentityContext) -> bool:
    return identity.is_admin


def can_edit_field(role: Any, sector: Any, field: Any) -> bool:
    role = try_choice(Role, role)
    sector = try_choice(Sector, sector)
    name = _field_name(field)
    if role is None or sector is None or name is None:
        return False

    rule = FIELD_RULES.get(name)
    if rule is None:
        return False
    return role in rule.roles and sector in rule.sectors


def editable_fields(role: Any, sector: Any) -> FrozenSet[FieldName]:
    return frozenset(f for f in FieldName if can_edit_field(role, sector, f))


__all__ = [
    "BUYER_ROLES",
    "CREW_RANKS",
    "PLANNING_ROLES",
    "OPERATIONAL_ROLES",
    "RECOGNIZED_SECTORS",
    "CREATOR_SECTORS",
    "EDIT_RULES",
    "FIELD_RULES",
    "EditRule",
    "FieldRule",
    "can_view",
    "can_create",
    "can_edit",
    "can_delete",
    "can_manage_users",
    "can_edit_field",
    "editable_fields",
]
