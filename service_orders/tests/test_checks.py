# service_orders/tests/test_checks.py

from django.core import checks

from service_orders import checks as policy_checks
from service_orders.choices import FieldName, OrderStatus, Sector


def _ids(errors):
    return sorted({e.id for e in errors})


def test_shipped_tables_pass():
    assert policy_checks.check_policy_tables(None) == []


def test_check_is_registered():
    assert policy_checks.check_policy_tables in checks.registry.registry.get_checks()


def test_status_missing_from_graph(monkeypatch):
    graph = dict(policy_checks.TRANSITIONS)
    graph.pop(OrderStatus.CANCELLED)
    monkeypatch.setattr(policy_checks, "TRANSITIONS", graph)

    errors = policy_checks.check_policy_tables(None)

    assert _ids(errors) == ["service_orders.E001"]
    assert "CANCELADA" in errors[0].msg


def test_self_loop(monkeypatch):
    edges = policy_checks.EDGES | {(OrderStatus.PLANNED, OrderStatus.PLANNED)}
    monkeypatch.setattr(policy_checks, "EDGES", edges)

    assert _ids(policy_checks.check_policy_tables(None)) == ["service_orders.E002"]


def test_sector_edge_outside_graph(monkeypatch):
    sector_edges = dict(policy_checks.SECTOR_EDGES)
    sector_edges[Sector.WAREHOUSE] = frozenset({(OrderStatus.PENDING, OrderStatus.COMPLETED)})
    monkeypatch.setattr(policy_checks, "SECTOR_EDGES", sector_edges)

    errors = policy_checks.check_policy_tables(None)

    assert _ids(errors) == ["service_orders.E003"]
    assert "ALMOXARIFADO" in errors[0].msg


def test_field_without_rule(monkeypatch):
    rules = dict(policy_checks.FIELD_RULES)
    rules.pop(FieldName.SUPPLIER_NOTES)
    monkeypatch.setattr(policy_checks, "FIELD_RULES", rules)

    errors = policy_checks.check_policy_tables(None)

    assert _ids(errors) == ["service_orders.E004"]
    assert "supplierNotes" in errors[0].msg
