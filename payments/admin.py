"""
Django admin registration for the payments app.

Provides list displays and filters for Payment records to facilitate
reconciliation against Stripe and troubleshooting by administrators.
"""
from django.contrib import admin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "project",
        "user",
        "reward",
        "amount",
        "currency",
        "status",
        "created_at",
    )
    list_filter = ("status", "currency")
    search_fields = ("user__username", "user__email", "project__title", "stripe_payment_id")
    readonly_fields = ("stripe_payment_id", "created_at", "updated_at")
    ordering = ("-created_at",)
