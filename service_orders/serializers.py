# service_orders/serializers.py
from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from service_orders.choices import OrderStatus, Role, Sector
from service_orders.policy import IdentityContext, OrderSnapshot


class IdentityContextSerializer(serializers.Serializer):
    """
    Storage/session representation of the acting user.

    Unknown role or sector strings are rejected, never mapped to a default.
    """

    id = serializers.CharField()
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=Role.choices)
    sector = serializers.ChoiceField(choices=Sector.choices)

    def to_representation(self, instance: IdentityContext) -> Dict[str, Any]:
        return instance.to_storage()

    def create(self, validated_data: Dict[str, Any]) -> IdentityContext:
        return IdentityContext(**validated_data)


class OrderSnapshotSerializer(serializers.Serializer):
    id = serializers.CharField()
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    createdById = serializers.CharField(
        source="created_by_id",
        required=False,
        allow_null=True,
    )

    def to_representation(self, instance: OrderSnapshot) -> Dict[str, Any]:
        return instance.to_storage()

    def create(self, validated_data: Dict[str, Any]) -> OrderSnapshot:
        return OrderSnapshot(**validated_data)


class TransitionCheckSerializer(serializers.Serializer):
    """
    Body of a transition check: the order's current state plus the requested status.
    """

    status = serializers.ChoiceField(choices=OrderStatus.choices)
    requested_status = serializers.ChoiceField(choices=OrderStatus.choices)
    order_id = serializers.CharField(required=False, allow_blank=True, default="")
    created_by_id = serializers.CharField(required=False, allow_null=True, default=None)

    def snapshot(self) -> OrderSnapshot:
        data = self.validated_data
        return OrderSnapshot(
            id=data["order_id"],
            status=data["status"],
            created_by_id=data["created_by_id"],
        )


class StatusQuerySerializer(serializers.Serializer):
    current = serializers.ChoiceField(choices=OrderStatus.choices)
