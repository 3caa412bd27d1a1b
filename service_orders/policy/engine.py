# service_orders/policy/engine.py
from __future__ import annotations

import enum
import functools
import logging
from typing import Any, Mapping, Optional

from django.conf import settings

from service_orders.choices import FieldName
from service_orders.policy import capabilities
from service_orders.policy.context import IdentityContext, OrderSnapshot, coerce_status
from service_orders.policy.exceptions import InvalidPolicyInput
from service_orders.policy.transitions import validate_transition
from service_orders.policy.verdicts import Verdict

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_DOMAIN = "@starnav.com.br"

OUTSIDE_ORGANIZATION = "access restricted to organization accounts"
VIEW_DENIED = "you are not allowed to view service orders"
CREATE_DENIED = "you are not allowed to create service orders"
EDIT_DENIED = "you are not allowed to edit this service order in its current status"
DELETE_DENIED = "only administrators can delete service orders"
USERS_DENIED = "only administrators can manage users"
ORDER_REQUIRED = "an order is required for this operation"


class Operation(str, enum.Enum):
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    MANAGE_USERS = "manage_users"


class AuthorizationEngine:
    """
    Single entry point for service-order authorization.

    Checks the organization email domain, then delegates to the capability
    matrix or the transition validator. No I/O; every answer is computed from
    the arguments and the module-level policy tables.
    """

    def __init__(self, email_domain: str = DEFAULT_EMAIL_DOMAIN):
        self.email_domain = email_domain

    # ---------------------------------------------------------------
    # Boolean queries
    # ---------------------------------------------------------------

    def in_organization(self, identity: IdentityContext) -> bool:
        return identity.has_email_domain(self.email_domain)

    def can_view(self, identity: IdentityContext) -> bool:
        return self.in_organization(identity) and capabilities.can_view(identity)

    def can_create(self, identity: IdentityContext) -> bool:
        return self.in_organization(identity) and capabilities.can_create(identity)

    def can_edit(self, identity: IdentityContext, order: OrderSnapshot) -> bool:
        return self.in_organization(identity) and capabilities.can_edit(identity, order)

    def can_delete(self, identity: IdentityContext) -> bool:
        return self.in_organization(identity) and capabilities.can_delete(identity)

    def can_manage_users(self, identity: IdentityContext) -> bool:
        return self.in_organization(identity) and capabilities.can_manage_users(identity)

    def can_edit_field(self, role: Any, sector: Any, field: Any) -> bool:
        return capabilities.can_edit_field(role, sector, field)

    # ---------------------------------------------------------------
    # Verdict queries
    # ---------------------------------------------------------------

    def authorize(
        self,
        operation: Any,
        identity: IdentityContext,
        order: Optional[OrderSnapshot] = None,
    ) -> Verdict:
        op = Operation(operation)

        if not self.in_organization(identity):
            return self._deny(op.value, identity, OUTSIDE_ORGANIZATION)

        if op is Operation.VIEW:
            ok, reason = capabilities.can_view(identity), VIEW_DENIED
        elif op is Operation.CREATE:
            ok, reason = capabilities.can_create(identity), CREATE_DENIED
        elif op is Operation.DELETE:
            ok, reason = capabilities.can_delete(identity), DELETE_DENIED
        elif op is Operation.MANAGE_USERS:
            ok, reason = capabilities.can_manage_users(identity), USERS_DENIED
        else:
            if order is None:
                return self._deny(op.value, identity, ORDER_REQUIRED)
            ok, reason = capabilities.can_edit(identity, order), EDIT_DENIED

        if ok:
            return Verdict.allow()
        return self._deny(op.value, identity, reason)

    def check_transition(
        self,
        current: Any,
        requested: Any,
        identity: IdentityContext,
    ) -> Verdict:
        if not self.in_organization(identity):
            return self._deny("transition", identity, OUTSIDE_ORGANIZATION)

        try:
            verdict = validate_transition(current, requested, identity)
        except InvalidPolicyInput as exc:
            return self._invalid("transition", identity, exc)

        if verdict.denied:
            logger.debug("Transition denied for %s: %s", identity.id, verdict.reason)
        return verdict

    def evaluate_edit(
        self,
        identity: IdentityContext,
        order: OrderSnapshot,
        changes: Mapping[str, Any],
    ) -> Verdict:
        """
        Full check for an edit request: the order must be editable, every
        restricted field set in ``changes`` must be editable by the actor, and a
        changed ``status`` must be a permitted transition.

        Administrators bypass field restrictions.
        """
        verdict = self.authorize(Operation.EDIT, identity, order)
        if not verdict:
            return verdict

        if not identity.is_admin:
            for name, value in changes.items():
                # Full-form bodies carry every field; blanks leave it unset.
                if name not in FieldName.values or value in (None, ""):
                    continue
                if not capabilities.can_edit_field(identity.role, identity.sector, name):
                    return self._deny(
                        "edit",
                        identity,
                        f"you are not allowed to change '{name}'",
                    )

        if "status" not in changes or changes["status"] in (None, ""):
            return Verdict.allow()

        try:
            requested = coerce_status(changes["status"])
        except InvalidPolicyInput as exc:
            return self._invalid("edit", identity, exc)

        return self.check_transition(order.status, requested, identity)

    # ---------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------

    def _deny(self, op: str, identity: IdentityContext, reason: str) -> Verdict:
        logger.debug("Denied %s for %s: %s", op, identity.id, reason)
        return Verdict.deny(reason)

    def _invalid(self, op: str, identity: IdentityContext, exc: InvalidPolicyInput) -> Verdict:
        logger.error("Invalid input during %s for %s: %s", op, identity.id, exc.messages)
        return Verdict.invalid(exc)


@functools.lru_cache(maxsize=None)
def get_engine() -> AuthorizationEngine:
    """
    Process-wide engine configured from settings.ORGANIZATION_EMAIL_DOMAIN.
    """
    domain = getattr(settings, "ORGANIZATION_EMAIL_DOMAIN", DEFAULT_EMAIL_DOMAIN)
    return AuthorizationEngine(email_domain=domain)
