# service_orders/tests/conftest.py

from __future__ import annotations

import uuid
from typing import Any, Callable, Optional

import pytest
from rest_framework.test import APIClient

from service_orders.choices import OrderStatus, Role, Sector
from service_orders.policy import AuthorizationEngine, IdentityContext, OrderSnapshot


def _rand(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class ProfileUser:
    """
    Minimal authenticated user exposing the profile attributes the
    identity resolver reads. Stands in for the project's user model.
    """

    is_authenticated = True
    is_anonymous = False
    is_active = True

    def __init__(
        self,
        *,
        role: Any,
        sector: Any,
        email: str = "user@starnav.com.br",
        pk: Optional[str] = None,
        is_superuser: bool = False,
    ):
        self.pk = pk or _rand("user")
        self.id = self.pk
        self.email = email
        self.role = role
        self.sector = sector
        self.is_superuser = is_superuser
        self.username = self.email

    def __str__(self) -> str:
        return self.email


class StoredOrder:
    """
    ORM-like order row: only pk, status and created_by_id matter to policy.
    """

    def __init__(self, *, status: Any, created_by_id: Optional[str] = None, pk: Optional[str] = None):
        self.pk = pk or _rand("os")
        self.status = status
        self.created_by_id = created_by_id


@pytest.fixture
def engine() -> AuthorizationEngine:
    return AuthorizationEngine(email_domain="@starnav.com.br")


@pytest.fixture
def identity_factory() -> Callable[..., IdentityContext]:
    def _factory(
        role: Any = Role.COORDINATOR,
        sector: Any = Sector.MAINTENANCE,
        *,
        email: str = "user@starnav.com.br",
        id: Optional[str] = None,
    ) -> IdentityContext:
        return IdentityContext(
            id=id or _rand("user"),
            email=email,
            role=role,
            sector=sector,
        )

    return _factory


@pytest.fixture
def order_factory() -> Callable[..., OrderSnapshot]:
    def _factory(
        status: Any = OrderStatus.PENDING,
        *,
        created_by_id: Optional[str] = "creator",
        id: Optional[str] = None,
    ) -> OrderSnapshot:
        return OrderSnapshot(
            id=id or _rand("os"),
            status=status,
            created_by_id=created_by_id,
        )

    return _factory


@pytest.fixture
def admin(identity_factory) -> IdentityContext:
    return identity_factory(Role.ADMIN, Sector.ADMINISTRATION, email="admin@starnav.com.br")


@pytest.fixture
def coordinator(identity_factory) -> IdentityContext:
    return identity_factory(Role.COORDINATOR, Sector.MAINTENANCE)


@pytest.fixture
def senior_buyer(identity_factory) -> IdentityContext:
    return identity_factory(Role.BUYER_SENIOR, Sector.PROCUREMENT)


@pytest.fixture
def chief_engineer(identity_factory) -> IdentityContext:
    return identity_factory(Role.CHIEF_ENGINEER, Sector.CREW)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def client_as(api_client) -> Callable[..., APIClient]:
    """
    Authenticate the API client as a profile user with the given role/sector.
    """

    def _login(role: Any, sector: Any, **kwargs: Any) -> APIClient:
        api_client.force_authenticate(user=ProfileUser(role=role, sector=sector, **kwargs))
        return api_client

    return _login


@pytest.fixture
def stored_order() -> Callable[..., StoredOrder]:
    return StoredOrder
