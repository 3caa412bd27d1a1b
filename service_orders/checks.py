# service_orders/checks.py

from django.core.checks import Error, register

from service_orders.choices import FieldName, OrderStatus
from service_orders.policy.capabilities import FIELD_RULES
from service_orders.policy.transitions import EDGES, SECTOR_EDGES, TRANSITIONS


@register()
def check_policy_tables(app_configs, **kwargs):
    """
    Django system check: every enum member is wired into the policy tables
    and the tables agree with each other.
    """
    errors = []

    # 1. Every status has a row in the graph
    for status in OrderStatus:
        if status not in TRANSITIONS:
            errors.append(
                Error(
                    f"OrderStatus '{status.value}' has no entry in the transition graph",
                    hint="Add it to service_orders.policy.transitions.TRANSITIONS.",
                    id="service_orders.E001",
                )
            )

    # 2. No self loops
    for src, dst in sorted(EDGES):
        if src == dst:
            errors.append(
                Error(
                    f"Self loop on '{src.value}' in the transition graph",
                    id="service_orders.E002",
                )
            )

    # 3. Sector allow-lists are subsets of the graph
    for sector, edges in SECTOR_EDGES.items():
        for src, dst in sorted(edges - EDGES):
            errors.append(
                Error(
                    f"Sector '{sector.value}' allows {src.value} -> {dst.value}, "
                    "which is not a graph edge",
                    id="service_orders.E003",
                )
            )

    # 4. Every restricted field has a rule
    for field in FieldName:
        if field not in FIELD_RULES:
            errors.append(
                Error(
                    f"FieldName '{field.value}' has no field rule",
                    hint="Add it to service_orders.policy.capabilities.FIELD_RULES.",
                    id="service_orders.E004",
                )
            )

    return errors
