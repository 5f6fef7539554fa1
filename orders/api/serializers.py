"""Orders API serializers.

Input serializers only check shapes and types; the business rules (budget
range, state, ownership) are enforced by the services. Output serializers
render orders for the feed, for the detail page and for "my orders", and the
executor responses attached to them.
"""

from rest_framework import serializers

from orders.models import Order, OrderResponse


# ------------------------------ input ------------------------------

class OrderWriteSerializer(serializers.Serializer):
    """Fields a client may set when creating or editing an order."""

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False)
    location = serializers.CharField(required=False, allow_blank=True)
    attachments = serializers.ListField(child=serializers.CharField(), required=False)
    budget_min = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    budget_max = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    deadline = serializers.DateField(required=False, allow_null=True)
    is_public = serializers.BooleanField(required=False)


class SelectExecutorSerializer(serializers.Serializer):
    response_id = serializers.IntegerField()
    agreed_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    agreed_deadline = serializers.DateField(required=False, allow_null=True)


class RevisionRequestSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True)


class ResponseWriteSerializer(serializers.Serializer):
    cover_letter = serializers.CharField(required=False, allow_blank=True)
    proposed_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    proposed_days = serializers.IntegerField(required=False, allow_null=True)


# ------------------------------ output ------------------------------

class OrderListSerializer(serializers.ModelSerializer):
    """Feed / list representation without the description."""

    client_username = serializers.CharField(source="client.username", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "title",
            "client",
            "client_username",
            "executor",
            "location",
            "budget_min",
            "budget_max",
            "deadline",
            "status",
            "is_public",
            "response_count",
            "view_count",
            "created_at",
        ]


class ExecutorOrderListSerializer(OrderListSerializer):
    is_executor_selected = serializers.BooleanField(read_only=True)

    class Meta(OrderListSerializer.Meta):
        fields = OrderListSerializer.Meta.fields + ["is_executor_selected"]


class OrderDetailSerializer(serializers.ModelSerializer):
    """Full order; the description is replaced by the gated one from the context."""

    description_truncated = serializers.SerializerMethodField()
    requires_verification = serializers.SerializerMethodField()
    requires_subscription = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "client",
            "executor",
            "title",
            "description",
            "description_truncated",
            "requires_verification",
            "requires_subscription",
            "location",
            "attachments",
            "budget_min",
            "budget_max",
            "agreed_price",
            "deadline",
            "agreed_deadline",
            "status",
            "is_public",
            "view_count",
            "response_count",
            "created_at",
            "updated_at",
            "started_at",
            "completed_at",
        ]
        read_only_fields = fields

    def _access(self, key, default=False):
        return self.context.get("access", {}).get(key, default)

    def get_description_truncated(self, obj):
        return self._access("description_truncated")

    def get_requires_verification(self, obj):
        return self._access("requires_verification")

    def get_requires_subscription(self, obj):
        return self._access("requires_subscription")

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["description"] = self._access("description", instance.description)
        return data


class OrderResponseSerializer(serializers.ModelSerializer):
    executor_username = serializers.CharField(source="executor.username", read_only=True)

    class Meta:
        model = OrderResponse
        fields = [
            "id",
            "order",
            "executor",
            "executor_username",
            "cover_letter",
            "proposed_price",
            "proposed_days",
            "is_selected",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
