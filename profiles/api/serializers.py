"""Profiles API serializers.

Contains serializers for:
- reading a profile (including executor statistics and reputation level),
- partially updating a profile (owner-only),
- listing executor profiles,
- listing client profiles.

Serializers ensure certain string fields never return `null` in responses, but
empty strings instead.
"""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from ..models import Profile

User = get_user_model()


# ------------------------------ helpers ------------------------------

def _apply_user_updates(user, data: dict):
    for attr, val in data.items():
        setattr(user, attr, val if val is not None else "")
    if data:
        user.save(update_fields=list(data.keys()))


def _coalesce_fields(data: dict, keys: set):
    for k in keys:
        if data.get(k) is None:
            data[k] = ""


_EXECUTOR_STATS = [
    "total_orders",
    "completed_orders",
    "disputed_orders",
    "avg_completion_days",
    "rating",
    "review_count",
    "reputation_level",
]


# ------------------------------ serializers ------------------------------

class ProfilePatchSerializer(serializers.ModelSerializer):
    """Partial update of the caller's own profile (contact data and names only)."""

    first_name = serializers.CharField(
        source="user.first_name", required=False, allow_blank=True, allow_null=True
    )
    last_name = serializers.CharField(
        source="user.last_name", required=False, allow_blank=True, allow_null=True
    )
    email = serializers.EmailField(
        source="user.email", required=False, allow_blank=True, allow_null=True
    )
    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "user",
            "username",
            "first_name",
            "last_name",
            "file",
            "location",
            "tel",
            "description",
            "specialization",
            "type",
            "email",
            "created_at",
        ]
        read_only_fields = ["user", "username", "type", "created_at"]
        extra_kwargs = {
            "file": {"required": False, "allow_blank": True, "allow_null": True},
            "location": {"required": False, "allow_blank": True, "allow_null": True},
            "tel": {"required": False, "allow_blank": True, "allow_null": True},
            "description": {"required": False, "allow_blank": True, "allow_null": True},
            "specialization": {"required": False, "allow_blank": True, "allow_null": True},
        }

    def update(self, instance: Profile, validated_data):
        """Handle nested user fields and normalize None -> ''."""
        _apply_user_updates(instance.user, validated_data.pop("user", {}))
        for attr, val in validated_data.items():
            setattr(instance, attr, val if val is not None else "")
        instance.save()
        return instance

    _no_null = {
        "first_name",
        "last_name",
        "location",
        "tel",
        "description",
        "specialization",
        "file",
    }

    def to_representation(self, instance: Profile):
        data = super().to_representation(instance)
        _coalesce_fields(data, self._no_null)
        return data


class ProfileDetailSerializer(serializers.ModelSerializer):
    """Read-only detail serializer; executor statistics are included for every profile."""

    username = serializers.CharField(source="user.username", read_only=True)
    first_name = serializers.CharField(
        source="user.first_name", read_only=True, allow_blank=True
    )
    last_name = serializers.CharField(
        source="user.last_name", read_only=True, allow_blank=True
    )
    email = serializers.EmailField(source="user.email", read_only=True)
    reputation_level = serializers.CharField(read_only=True)

    class Meta:
        model = Profile
        fields = [
            "user",
            "username",
            "first_name",
            "last_name",
            "file",
            "location",
            "tel",
            "description",
            "specialization",
            "type",
            "email",
            "is_verified",
            *_EXECUTOR_STATS,
            "created_at",
        ]
        read_only_fields = fields

    _no_null = {
        "first_name",
        "last_name",
        "location",
        "tel",
        "description",
        "specialization",
    }

    def to_representation(self, instance: Profile):
        data = super().to_representation(instance)
        _coalesce_fields(data, self._no_null)
        return data


class ExecutorProfileListSerializer(serializers.ModelSerializer):
    """List serializer for executor profiles."""

    username = serializers.CharField(source="user.username", read_only=True)
    first_name = serializers.CharField(
        source="user.first_name", read_only=True, allow_blank=True
    )
    last_name = serializers.CharField(
        source="user.last_name", read_only=True, allow_blank=True
    )
    reputation_level = serializers.CharField(read_only=True)

    class Meta:
        model = Profile
        fields = [
            "user",
            "username",
            "first_name",
            "last_name",
            "file",
            "location",
            "specialization",
            "type",
            *_EXECUTOR_STATS,
        ]

    _no_null = {"first_name", "last_name", "location", "specialization"}

    def to_representation(self, instance):
        data = super().to_representation(instance)
        _coalesce_fields(data, self._no_null)
        return data


class ClientProfileListSerializer(serializers.ModelSerializer):
    """List serializer for client profiles."""

    username = serializers.CharField(source="user.username", read_only=True)
    first_name = serializers.CharField(
        source="user.first_name", read_only=True, allow_blank=True
    )
    last_name = serializers.CharField(
        source="user.last_name", read_only=True, allow_blank=True
    )

    class Meta:
        model = Profile
        fields = [
            "user",
            "username",
            "first_name",
            "last_name",
            "file",
            "created_at",
            "type",
        ]

    _no_null = {"first_name", "last_name", "type"}

    def to_representation(self, instance):
        data = super().to_representation(instance)
        _coalesce_fields(data, self._no_null)
        return data
