"""
Database models for the payments app.

A `Payment` records one donation by a user to a project, optionally
tied to a reward tier.  Each Payment references the Stripe object
that settled it (a PaymentIntent id or a Checkout Session id); the
identifier is unique so a Stripe payment is never recorded twice, no
matter how many times the confirm endpoint or the webhook delivers it.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models

from projects.models import Project, Reward


class Payment(models.Model):
    """A single donation settled through Stripe."""

    STATUS_PENDING = "pending"
    STATUS_COMPLETED = "completed"
    STATUS_FAILED = "failed"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_FAILED, "Failed"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payments",
    )
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="payments",
    )
    reward = models.ForeignKey(
        Reward,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments",
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2, help_text="Amount in major currency units")
    currency = models.CharField(max_length=10, default="inr")
    stripe_payment_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Stripe PaymentIntent or Checkout Session identifier",
    )
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_COMPLETED,
    )
    receipt = models.FileField(upload_to="receipts/", blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "status"], name="payments_pa_user_id_7b2f91_idx"),
            models.Index(fields=["project", "status"], name="payments_pa_project_4e6d0c_idx"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"Payment {self.id} ({self.get_status_display()})"
