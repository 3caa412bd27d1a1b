# service_orders/policy/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from django.db import models

from service_orders.choices import OrderStatus, Role, Sector
from service_orders.policy.exceptions import InvalidPolicyInput


C = TypeVar("C", bound=models.TextChoices)


# ===============================================================
# Enum coercion
# ===============================================================

def coerce_choice(choices: Type[C], value: Any, *, code: str) -> C:
    """
    Strictly convert a stored value into a member of ``choices``.

    Only the exact stored string matches: no case folding, no trimming.
    Unknown values raise InvalidPolicyInput; nothing falls back to a default.
    """
    if isinstance(value, choices):
        return value
    try:
        return choices(value)
    except (TypeError, ValueError):
        raise InvalidPolicyInput(
            f"Unknown {choices.__name__} value: {value!r}",
            code=code,
        ) from None


def try_choice(choices: Type[C], value: Any) -> Optional[C]:
    """Non-raising variant for total predicates: unknown values become None."""
    if isinstance(value, choices):
        return value
    try:
        return choices(value)
    except (TypeError, ValueError):
        return None


def coerce_status(value: Any) -> OrderStatus:
    return coerce_choice(OrderStatus, value, code="invalid_status")


def coerce_role(value: Any) -> Role:
    return coerce_choice(Role, value, code="invalid_role")


def coerce_sector(value: Any) -> Sector:
    return coerce_choice(Sector, value, code="invalid_sector")


# ===============================================================
# Value types
# ===============================================================

@dataclass(frozen=True)
class IdentityContext:
    """
    Immutable snapshot of the acting user for a single request.
    """

    id: str
    email: str
    role: Role
    sector: Sector

    def __post_init__(self):
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "email", str(self.email or "").strip())
        object.__setattr__(self, "role", coerce_role(self.role))
        object.__setattr__(self, "sector", coerce_sector(self.sector))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def has_email_domain(self, domain: str) -> bool:
        suffix = (domain or "").strip().lower()
        if not suffix:
            return False
        return self.email.lower().endswith(suffix)

    @classmethod
    def from_storage(cls, data: Mapping[str, Any]) -> "IdentityContext":
        return cls(
            id=data["id"],
            email=data.get("email") or "",
            role=data.get("role"),
            sector=data.get("sector"),
        )

    def to_storage(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role.value,
            "sector": self.sector.value,
        }


@dataclass(frozen=True)
class OrderSnapshot:
    """
    Status and creator of an order, as read from storage.
    """

    id: str
    status: OrderStatus
    created_by_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "status", coerce_status(self.status))
        if self.created_by_id is not None:
            object.__setattr__(self, "created_by_id", str(self.created_by_id))

    @classmethod
    def from_storage(cls, data: Mapping[str, Any]) -> "OrderSnapshot":
        return cls(
            id=data["id"],
            status=data.get("status"),
            created_by_id=data.get("createdById", data.get("created_by_id")),
        )

    @classmethod
    def from_instance(cls, obj: Any) -> "OrderSnapshot":
        """Adapt any ORM-like object exposing pk/id, status and created_by_id."""
        pk = getattr(obj, "pk", None)
        if pk is None:
            pk = getattr(obj, "id")
        return cls(
            id=pk,
            status=getattr(obj, "status", None),
            created_by_id=getattr(obj, "created_by_id", None),
        )

    def to_storage(self) -> Dict[str, Optional[str]]:
        return {
            "id": self.id,
            "status": self.status.value,
            "createdById": self.created_by_id,
        }
