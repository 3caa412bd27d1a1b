# service_orders/policy/verdicts.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from service_orders.policy.exceptions import InvalidPolicyInput


class Outcome(str, enum.Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    INVALID = "invalid"


@dataclass(frozen=True)
class Verdict:
    """
    Result of an authorization query.

    DENIED is a normal policy outcome with a user-facing reason. INVALID means
    the inputs themselves were out of range and carries the error.
    """

    outcome: Outcome
    reason: str = ""
    error: Optional[InvalidPolicyInput] = None

    @classmethod
    def allow(cls) -> "Verdict":
        return cls(Outcome.ALLOWED)

    @classmethod
    def deny(cls, reason: str) -> "Verdict":
        return cls(Outcome.DENIED, reason=reason)

    @classmethod
    def invalid(cls, error: InvalidPolicyInput) -> "Verdict":
        return cls(Outcome.INVALID, reason="; ".join(error.messages), error=error)

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOWED

    @property
    def denied(self) -> bool:
        return self.outcome is Outcome.DENIED

    @property
    def is_invalid(self) -> bool:
        return self.outcome is Outcome.INVALID

    def __bool__(self) -> bool:
        return self.allowed

    def as_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "allowed": self.allowed,
            "reason": self.reason or None,
        }


TransitionResult = Verdict
