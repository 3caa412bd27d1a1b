# service_orders/tests/test_context_serializers.py

import dataclasses

import pytest

from service_orders.choices import OrderStatus, Role, Sector
from service_orders.policy import IdentityContext, InvalidPolicyInput, OrderSnapshot
from service_orders.serializers import (
    IdentityContextSerializer,
    OrderSnapshotSerializer,
    TransitionCheckSerializer,
)


# ==================================================
# VALUE TYPES
# ==================================================

@pytest.mark.parametrize("role", list(Role))
@pytest.mark.parametrize("sector", list(Sector))
def test_identity_storage_round_trip(role, sector):
    stored = {"id": "u-1", "email": "a@starnav.com.br", "role": role.value, "sector": sector.value}

    identity = IdentityContext.from_storage(stored)

    assert identity.role is role
    assert identity.sector is sector
    assert identity.to_storage() == stored


@pytest.mark.parametrize("status", list(OrderStatus))
def test_order_storage_round_trip(status):
    stored = {"id": "os-1", "status": status.value, "createdById": "u-9"}

    order = OrderSnapshot.from_storage(stored)

    assert order.status is status
    assert order.to_storage() == stored


@pytest.mark.parametrize(
    "field, value, code",
    [
        ("role", "CAPITAO", "invalid_role"),
        ("role", None, "invalid_role"),
        ("role", "gestor", "invalid_role"),
        ("sector", "ESTALEIRO", "invalid_sector"),
        ("sector", "", "invalid_sector"),
        ("sector", " OPERACAO ", "invalid_sector"),
    ],
)
def test_identity_rejects_unknown_enums(field, value, code):
    stored = {"id": "u-1", "email": "a@starnav.com.br", "role": "GESTOR", "sector": "OPERACAO"}
    stored[field] = value

    with pytest.raises(InvalidPolicyInput) as excinfo:
        IdentityContext.from_storage(stored)
    assert excinfo.value.code == code


def test_order_rejects_legacy_status():
    with pytest.raises(InvalidPolicyInput):
        OrderSnapshot.from_storage({"id": "os-1", "status": "AGUARDANDO_PECAS"})


def test_order_status_must_match_stored_value_exactly():
    with pytest.raises(InvalidPolicyInput) as excinfo:
        OrderSnapshot.from_storage({"id": "os-1", "status": "pendente"})
    assert excinfo.value.code == "invalid_status"


def test_value_types_are_frozen(coordinator, order_factory):
    with pytest.raises(dataclasses.FrozenInstanceError):
        coordinator.role = Role.ADMIN
    with pytest.raises(dataclasses.FrozenInstanceError):
        order_factory().status = OrderStatus.COMPLETED


def test_order_from_instance(stored_order):
    row = stored_order(status="EM_EXECUCAO", created_by_id=42, pk=7)
    order = OrderSnapshot.from_instance(row)
    assert order == OrderSnapshot(id="7", status=OrderStatus.IN_PROGRESS, created_by_id="42")


# ==================================================
# SERIALIZERS
# ==================================================

def test_identity_serializer_round_trip():
    payload = {"id": "u-1", "email": "cmd@starnav.com.br", "role": "COMANDANTE", "sector": "TRIPULACAO"}

    ser = IdentityContextSerializer(data=payload)
    assert ser.is_valid(), ser.errors
    identity = ser.save()

    assert identity.role is Role.COMMANDING_OFFICER
    assert identity.sector is Sector.CREW
    assert IdentityContextSerializer(identity).data == payload


def test_identity_serializer_rejects_unknown_role():
    ser = IdentityContextSerializer(
        data={"id": "u-1", "email": "x@starnav.com.br", "role": "CAPITAO", "sector": "TRIPULACAO"}
    )
    assert not ser.is_valid()
    assert "role" in ser.errors


def test_order_serializer_round_trip():
    payload = {"id": "os-1", "status": "AGUARDANDO_SUPRIMENTOS", "createdById": "u-3"}

    ser = OrderSnapshotSerializer(data=payload)
    assert ser.is_valid(), ser.errors
    order = ser.save()

    assert order.status is OrderStatus.AWAITING_PROCUREMENT
    assert order.created_by_id == "u-3"
    assert OrderSnapshotSerializer(order).data == payload


def test_order_serializer_rejects_unknown_status():
    ser = OrderSnapshotSerializer(data={"id": "os-1", "status": "ARQUIVADA"})
    assert not ser.is_valid()
    assert "status" in ser.errors


def test_transition_check_serializer_snapshot():
    ser = TransitionCheckSerializer(
        data={"status": "CONTRATADA", "requested_status": "EM_EXECUCAO", "order_id": "os-5"}
    )
    assert ser.is_valid(), ser.errors

    order = ser.snapshot()
    assert order.id == "os-5"
    assert order.status is OrderStatus.CONTRACTED
    assert order.created_by_id is None
