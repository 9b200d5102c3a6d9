"""
Serializers for the payments app.

``PaymentSerializer`` exposes recorded donations with the project
summary and receipt link.  The request serializers validate the bodies
of the intent, confirm and checkout endpoints; Stripe calls happen in
the views.
"""
from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import serializers

from projects.serializers import ProjectSummarySerializer
from users.serializers import UserMiniSerializer
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for Payment objects (read-only)."""

    user = UserMiniSerializer(read_only=True)
    project = ProjectSummarySerializer(read_only=True)
    reward_id = serializers.IntegerField(read_only=True, allow_null=True)
    reward_title = serializers.CharField(source="reward.title", read_only=True, default=None)
    receipt_url = serializers.SerializerMethodField()
    receipt_download_url = serializers.SerializerMethodField()

    class Meta:
        model = Payment
        fields = [
            "id",
            "user",
            "project",
            "reward_id",
            "reward_title",
            "amount",
            "currency",
            "stripe_payment_id",
            "status",
            "receipt_url",
            "receipt_download_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def _absolute(self, url: str) -> str:
        request = self.context.get("request")
        return request.build_absolute_uri(url) if request is not None else url

    def get_receipt_url(self, obj) -> str | None:
        if not obj.receipt:
            return None
        return self._absolute(obj.receipt.url)

    def get_receipt_download_url(self, obj) -> str | None:
        if not obj.receipt:
            return None
        return self._absolute(reverse("payment-receipt", args=[obj.pk]))


class CreateIntentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("1"))
    project_id = serializers.IntegerField()
    reward_id = serializers.IntegerField(required=False, allow_null=True)


class ConfirmIntentSerializer(serializers.Serializer):
    payment_intent_id = serializers.CharField(max_length=255)
    project_id = serializers.IntegerField()
    # Informational only; the recorded reward and amount come from Stripe
    reward_id = serializers.IntegerField(required=False, allow_null=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)


class CreateCheckoutSessionSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("1"))
    reward_id = serializers.IntegerField(required=False, allow_null=True)


class ConfirmCheckoutSerializer(serializers.Serializer):
    session_id = serializers.CharField(max_length=255, error_messages={"required": "Session ID is required"})
