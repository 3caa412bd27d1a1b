from __future__ import annotations

import pathlib

REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]


def test_no_policy_module_shadowing():
    p = REPO_ROOT / "service_orders" / "policy.py"
    assert not p.exists(), (
        "Do not allow service_orders/policy.py to exist. "
        "It shadows the service_orders/policy/ package."
    )


def test_policy_public_api_contract():
    import service_orders.policy as policy

    required = {
        "IdentityContext",
        "OrderSnapshot",
        "InvalidPolicyInput",
        "Verdict",
        "Outcome",
        "AuthorizationEngine",
        "Operation",
        "get_engine",
        "can_view",
        "can_create",
        "can_edit",
        "can_delete",
        "can_manage_users",
        "can_edit_field",
        "editable_fields",
        "validate_transition",
        "allowed_next_statuses",
        "available_transitions",
        "workflow_definition",
        "is_edge",
    }

    missing = sorted(required - set(policy.__all__))
    assert not missing, f"Policy API missing exports: {missing}"

    for name in required:
        assert getattr(policy, name) is not None


def test_policy_layer_does_not_touch_http():
    """
    The policy package is pure: DRF belongs to the adapters around it.
    """
    offenders = []
    for p in (REPO_ROOT / "service_orders" / "policy").rglob("*.py"):
        text = p.read_text(encoding="utf-8")
        if "rest_framework" in text or "django.http" in text:
            offenders.append(p.name)
    assert not offenders, f"HTTP imports in policy modules: {offenders}"

