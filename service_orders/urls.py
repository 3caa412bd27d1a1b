# service_orders/urls.py

from django.urls import path

from .views import (
    CapabilitiesView,
    TransitionCheckView,
    WorkflowAllowedTransitionsView,
    WorkflowDefinitionView,
    WorkflowNextStatusesView,
)

app_name = "service_orders"

urlpatterns = [
    # -------------------------------------------------
    # Workflow introspection (canonical, read-only)
    # -------------------------------------------------
    path(
        "workflow/definition/",
        WorkflowDefinitionView.as_view(),
        name="workflow-definition",
    ),
    path(
        "workflow/next/",
        WorkflowNextStatusesView.as_view(),
        name="workflow-next",
    ),
    path(
        "workflow/allowed/",
        WorkflowAllowedTransitionsView.as_view(),
        name="workflow-allowed",
    ),
    path(
        "workflow/check/",
        TransitionCheckView.as_view(),
        name="workflow-check",
    ),

    # -------------------------------------------------
    # Caller capability summary
    # -------------------------------------------------
    path(
        "capabilities/",
        CapabilitiesView.as_view(),
        name="capabilities",
    ),
]
