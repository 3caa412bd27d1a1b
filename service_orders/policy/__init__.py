# service_orders/policy/__init__.py
from __future__ import annotations

from service_orders.policy.capabilities import (
    can_create,
    can_delete,
    can_edit,
    can_edit_field,
    can_manage_users,
    can_view,
    editable_fields,
)
from service_orders.policy.context import (
    IdentityContext,
    OrderSnapshot,
    coerce_role,
    coerce_sector,
    coerce_status,
)
from service_orders.policy.engine import AuthorizationEngine, Operation, get_engine
from service_orders.policy.exceptions import InvalidPolicyInput
from service_orders.policy.transitions import (
    allowed_next_statuses,
    available_transitions,
    is_edge,
    validate_transition,
    workflow_definition,
)
from service_orders.policy.verdicts import Outcome, TransitionResult, Verdict


__all__ = [
    "IdentityContext",
    "OrderSnapshot",
    "coerce_role",
    "coerce_sector",
    "coerce_status",
    "InvalidPolicyInput",
    "Outcome",
    "Verdict",
    "TransitionResult",
    "can_view",
    "can_create",
    "can_edit",
    "can_edit_field",
    "can_delete",
    "can_manage_users",
    "editable_fields",
    "is_edge",
    "validate_transition",
    "allowed_next_statuses",
    "available_transitions",
    "workflow_definition",
    "AuthorizationEngine",
    "Operation",
    "get_engine",
]
