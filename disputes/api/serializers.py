"""Disputes API serializers."""

from rest_framework import serializers

from chat.models import Message
from disputes.models import Dispute, DisputeEvidence


# ------------------------------ input ------------------------------

class OpenDisputeSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True)


class EvidenceInputSerializer(serializers.Serializer):
    file_url = serializers.CharField(allow_blank=True)
    file_name = serializers.CharField(allow_blank=True)
    file_type = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    file_size = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class AdminNotesSerializer(serializers.Serializer):
    notes = serializers.CharField(allow_blank=True)


class ResolveDisputeSerializer(serializers.Serializer):
    favor_client = serializers.BooleanField()
    resolution_notes = serializers.CharField(required=False, allow_blank=True, default="")
    admin_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)


# ------------------------------ output ------------------------------

class DisputeEvidenceSerializer(serializers.ModelSerializer):
    uploaded_by_username = serializers.CharField(source="uploaded_by.username", read_only=True)

    class Meta:
        model = DisputeEvidence
        fields = [
            "id",
            "dispute",
            "uploaded_by",
            "uploaded_by_username",
            "file_url",
            "file_name",
            "file_type",
            "file_size",
            "description",
            "created_at",
        ]
        read_only_fields = fields


class DisputeSerializer(serializers.ModelSerializer):
    order_title = serializers.CharField(source="order.title", read_only=True)
    order_status = serializers.CharField(source="order.status", read_only=True)
    client = serializers.IntegerField(source="order.client_id", read_only=True)
    executor = serializers.IntegerField(source="order.executor_id", read_only=True, allow_null=True)
    evidence_count = serializers.SerializerMethodField()

    class Meta:
        model = Dispute
        fields = [
            "id",
            "order",
            "order_title",
            "order_status",
            "client",
            "executor",
            "opened_by",
            "reason",
            "status",
            "admin",
            "resolution",
            "resolution_notes",
            "chat_room",
            "evidence_count",
            "created_at",
            "updated_at",
            "resolved_at",
        ]
        read_only_fields = fields

    def get_evidence_count(self, obj):
        return obj.evidence.count()


class AdminDisputeSerializer(DisputeSerializer):
    """Admins additionally see their internal notes."""

    class Meta(DisputeSerializer.Meta):
        fields = DisputeSerializer.Meta.fields + ["admin_notes"]
        read_only_fields = fields


class DisputeMessageSerializer(serializers.ModelSerializer):
    sender_username = serializers.CharField(source="sender.username", read_only=True)

    class Meta:
        model = Message
        fields = ["id", "room", "sender", "sender_username", "content", "is_system", "is_read", "created_at"]
        read_only_fields = fields
