# service_orders/policy/exceptions.py

from django.core.exceptions import ValidationError


class InvalidPolicyInput(ValidationError):
    """
    An enum value outside the known status/role/sector set reached the engine.

    This signals upstream data corruption or a schema mismatch, not a user
    mistake. Callers should reject the request and log it as a bug.
    """

    def __init__(self, message, code=None, params=None):
        super().__init__(message, code=code or "invalid", params=params)
