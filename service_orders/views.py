# service_orders/views.py
"""
Read-only workflow introspection for service orders.

NO side effects. These endpoints only evaluate policy; order storage and
mutation belong to the order API.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from service_orders.choices import FieldName
from service_orders.permissions import request_identity
from service_orders.policy import (
    OrderSnapshot,
    allowed_next_statuses,
    editable_fields,
    get_engine,
    workflow_definition,
)
from service_orders.serializers import StatusQuerySerializer, TransitionCheckSerializer


CURRENT_PARAM = OpenApiParameter(
    name="current",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    required=True,
    description="Current order status (stored value, e.g. PENDENTE).",
)


def _status_payload(statuses):
    return [s.value for s in statuses]


class WorkflowDefinitionView(APIView):
    """
    Returns statuses, graph edges and per-sector edge allow-lists.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        return Response(workflow_definition())


class WorkflowNextStatusesView(APIView):
    """
    Returns graph successors of the current status, independent of the caller.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(parameters=[CURRENT_PARAM], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        query = StatusQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        current = query.validated_data["current"]

        next_statuses = allowed_next_statuses(current)
        return Response(
            {
                "current": current,
                "allowed_next": _status_payload(next_statuses),
            }
        )


class WorkflowAllowedTransitionsView(APIView):
    """
    Returns the statuses the caller may move an order to from ``current``.

    Empty unless the caller may edit an order in that status.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(parameters=[CURRENT_PARAM], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        query = StatusQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        current = query.validated_data["current"]

        engine = get_engine()
        identity = request_identity(request)

        allowed = []
        if engine.can_edit(identity, OrderSnapshot(id="", status=current)):
            allowed = [
                target
                for target in allowed_next_statuses(current)
                if engine.check_transition(current, target, identity).allowed
            ]

        return Response(
            {
                "current": current,
                "role": identity.role.value,
                "sector": identity.sector.value,
                "allowed": _status_payload(allowed),
            }
        )


class TransitionCheckView(APIView):
    """
    Evaluates one requested transition for the caller.

    Body: {"status": "...", "requested_status": "...", "created_by_id": "..."}
    Denials are reported with 200 and a reason; out-of-range input is a 400.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(request=TransitionCheckSerializer, responses={200: OpenApiTypes.OBJECT})
    def post(self, request):
        body = TransitionCheckSerializer(data=request.data)
        body.is_valid(raise_exception=True)

        order = body.snapshot()
        requested = body.validated_data["requested_status"]

        engine = get_engine()
        identity = request_identity(request)

        verdict = engine.check_transition(order.status, requested, identity)

        return Response(
            {
                "current": order.status.value,
                "requested": requested,
                "can_edit": engine.can_edit(identity, order),
                **verdict.as_dict(),
            }
        )


class CapabilitiesView(APIView):
    """
    Summarizes what the caller may do with service orders.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        engine = get_engine()
        identity = request_identity(request)

        if not engine.in_organization(identity):
            fields = frozenset()
        elif identity.is_admin:
            fields = frozenset(FieldName)
        else:
            fields = editable_fields(identity.role, identity.sector)

        return Response(
            {
                "role": identity.role.value,
                "sector": identity.sector.value,
                "can_view": engine.can_view(identity),
                "can_create": engine.can_create(identity),
                "can_delete": engine.can_delete(identity),
                "can_manage_users": engine.can_manage_users(identity),
                "editable_fields": sorted(f.value for f in fields),
            }
        )
