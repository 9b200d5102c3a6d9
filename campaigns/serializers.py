"""
Serializers for the campaigns app.

Proposed reward tiers are validated with ``RewardSpecSerializer`` and
stored on the request as a JSON list (amounts kept as strings so the
list stays JSON-serialisable); they become ``Reward`` rows when the
request is approved.
"""
from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from users.serializers import UserMiniSerializer
from .models import CampaignRequest


class RewardSpecSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))
    delivery = serializers.CharField(max_length=128)


class CampaignRequestSerializer(serializers.ModelSerializer):
    creator = UserMiniSerializer(read_only=True)
    reviewed_by = UserMiniSerializer(read_only=True)
    days_left = serializers.IntegerField(source="duration_days", min_value=1)
    rewards = RewardSpecSerializer(many=True, required=False)
    project_id = serializers.IntegerField(read_only=True, allow_null=True)
    certificate_url = serializers.SerializerMethodField()

    class Meta:
        model = CampaignRequest
        fields = [
            "id", "title", "description", "long_description", "category", "image",
            "goal", "days_left", "featured", "rewards", "creator",
            "status", "admin_notes", "reviewed_by", "reviewed_at",
            "project_id", "certificate_url", "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "creator", "status", "admin_notes", "reviewed_by", "reviewed_at",
            "project_id", "certificate_url", "created_at", "updated_at",
        ]
        extra_kwargs = {"goal": {"min_value": 1}}

    def get_certificate_url(self, obj) -> str | None:
        if not obj.certificate:
            return None
        request = self.context.get("request")
        url = obj.certificate.url
        return request.build_absolute_uri(url) if request is not None else url

    def validate_rewards(self, value):
        return [
            {
                "title": reward["title"],
                "description": reward["description"],
                "amount": str(reward["amount"]),
                "delivery": reward["delivery"],
            }
            for reward in value
        ]

    def create(self, validated_data):
        # Submissions always start pending whatever the client sent
        validated_data["status"] = CampaignRequest.STATUS_PENDING
        return CampaignRequest.objects.create(**validated_data)


class ReviewSerializer(serializers.Serializer):
    admin_notes = serializers.CharField(required=False, allow_blank=True, default="")
