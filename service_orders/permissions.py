# service_orders/permissions.py
from __future__ import annotations

import logging

from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import BasePermission, SAFE_METHODS

from service_orders.choices import Role, Sector
from service_orders.policy import (
    IdentityContext,
    InvalidPolicyInput,
    Operation,
    OrderSnapshot,
    Verdict,
    get_engine,
)

logger = logging.getLogger(__name__)

PROFILE_ERROR = "Unable to resolve your user profile. Contact an administrator."


# ------------------------------------------------------------------
# Identity resolution
# ------------------------------------------------------------------
def identity_from_user(user) -> IdentityContext:
    """
    Build the identity for an authenticated user.

    The user model is expected to expose ``email``, ``role`` and ``sector``.
    Superusers without an explicit role are treated as ADMIN.
    Raises InvalidPolicyInput for unknown role/sector values.
    """
    role = getattr(user, "role", None)
    sector = getattr(user, "sector", None)

    if not role and getattr(user, "is_superuser", False):
        role = Role.ADMIN
        sector = sector or Sector.ADMINISTRATION

    return IdentityContext(
        id=getattr(user, "pk", None) or getattr(user, "id", ""),
        email=getattr(user, "email", "") or "",
        role=role,
        sector=sector,
    )


def request_identity(request) -> IdentityContext:
    """
    Identity for the request user, cached on the request.

    Unknown profile data is logged as a bug and rejected with 403.
    """
    cached = getattr(request, "_service_order_identity", None)
    if cached is not None:
        return cached

    try:
        identity = identity_from_user(request.user)
    except InvalidPolicyInput as exc:
        logger.error(
            "Invalid profile for user %s: %s",
            getattr(request.user, "pk", None),
            exc.messages,
        )
        raise PermissionDenied(PROFILE_ERROR) from exc

    request._service_order_identity = identity
    return identity


def enforce(verdict: Verdict) -> bool:
    """
    Translate a verdict for DRF: DENIED raises 403 with the reason,
    INVALID raises 400.
    """
    if verdict.allowed:
        return True
    if verdict.is_invalid:
        raise ValidationError({"detail": verdict.reason})
    raise PermissionDenied(verdict.reason)


def _authenticated(request) -> bool:
    user = getattr(request, "user", None)
    return bool(user and user.is_authenticated)


# ------------------------------------------------------------------
# Permission classes
# ------------------------------------------------------------------
class ServiceOrderPermission(BasePermission):
    """
    Read: VIEW capability
    Create: CREATE capability
    Update: EDIT capability on the object, including field and status checks
    Delete: administrators only

    Objects are adapted with OrderSnapshot.from_instance, so any object
    exposing pk, status and created_by_id works.
    """

    message = "You do not have permission to perform this action on service orders."

    def has_permission(self, request, view):
        if not _authenticated(request):
            return False

        engine = get_engine()
        identity = request_identity(request)

        if request.method in SAFE_METHODS:
            return enforce(engine.authorize(Operation.VIEW, identity))

        if request.method == "POST":
            return enforce(engine.authorize(Operation.CREATE, identity))

        # Object-level checks decide the rest
        if not engine.in_organization(identity):
            return enforce(engine.authorize(Operation.EDIT, identity))
        return True

    def has_object_permission(self, request, view, obj):
        if not _authenticated(request):
            return False

        engine = get_engine()
        identity = request_identity(request)

        if request.method in SAFE_METHODS:
            return enforce(engine.authorize(Operation.VIEW, identity))

        if request.method == "DELETE":
            return enforce(engine.authorize(Operation.DELETE, identity))

        try:
            order = OrderSnapshot.from_instance(obj)
        except InvalidPolicyInput as exc:
            logger.error("Stored order %s is invalid: %s", getattr(obj, "pk", None), exc.messages)
            raise ValidationError({"detail": "; ".join(exc.messages)}) from exc

        changes = request.data if hasattr(request.data, "keys") else {}
        return enforce(engine.evaluate_edit(identity, order, changes))


class IsUserAdministrator(BasePermission):
    """
    User administration endpoints are restricted to administrators.
    """

    def has_permission(self, request, view):
        if not _authenticated(request):
            return False
        identity = request_identity(request)
        return enforce(get_engine().authorize(Operation.MANAGE_USERS, identity))
