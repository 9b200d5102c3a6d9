"""
Database models for the campaigns app.

A `CampaignRequest` is a project proposal submitted by a user.  It
carries the same descriptive fields as a `Project` plus its proposed
reward tiers (kept as a JSON list until approval).  An administrator
reviews each request; approving it creates exactly one live `Project`
and renders an approval certificate.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models

from projects.models import Project


class CampaignRequest(models.Model):
    """A user's proposal for a new crowdfunding campaign."""

    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"
    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    title = models.CharField(max_length=255)
    description = models.TextField()
    long_description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=64)
    image = models.URLField(max_length=500)
    goal = models.DecimalField(max_digits=12, decimal_places=2)
    duration_days = models.PositiveIntegerField(help_text="Requested campaign length in days")
    featured = models.BooleanField(default=False)
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="campaign_requests",
    )
    rewards = models.JSONField(default=list, blank=True)
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
    )
    admin_notes = models.TextField(blank=True, default="")
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_campaign_requests",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    certificate = models.FileField(upload_to="certificates/", blank=True, null=True)
    project = models.OneToOneField(
        Project,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="campaign_request",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["creator", "status"], name="campaigns_c_creator_9a3b5d_idx"),
            models.Index(fields=["status", "created_at"], name="campaigns_c_status_2c7e4f_idx"),
        ]
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.title} ({self.get_status_display()})"

    @property
    def is_pending(self) -> bool:
        return self.status == self.STATUS_PENDING
