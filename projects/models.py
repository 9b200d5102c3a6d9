"""
Database models for the projects app.

A `Project` is a live crowdfunding campaign.  Each project owns a list
of `Reward` tiers offered to backers and a feed of `ProjectUpdate`
entries posted by administrators (or generated automatically when a
donation is recorded).  The funding counters `raised` and `backers`
are only ever changed through `F()` expressions inside the payment
transaction so concurrent donations never lose an increment.
"""
from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


class Project(models.Model):
    """A crowdfunding campaign that accepts donations until its end date."""

    STATUS_ACTIVE = "active"
    STATUS_SUCCESSFUL = "successful"
    STATUS_FAILED = "failed"
    STATUS_DRAFT = "draft"
    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_SUCCESSFUL, "Successful"),
        (STATUS_FAILED, "Failed"),
        (STATUS_DRAFT, "Draft"),
    ]

    title = models.CharField(max_length=255)
    description = models.TextField()
    long_description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=64, db_index=True)
    image = models.URLField(max_length=500)
    goal = models.DecimalField(max_digits=12, decimal_places=2)
    raised = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    backers = models.PositiveIntegerField(default=0)
    duration_days = models.PositiveIntegerField(help_text="Campaign length in days")
    end_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
    )
    verified = models.BooleanField(default=True)
    featured = models.BooleanField(default=False)
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="projects",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["status", "featured"], name="projects_pr_status_3f1c2a_idx"),
            models.Index(fields=["status", "end_date"], name="projects_pr_status_8d4e7b_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.title

    def save(self, *args, **kwargs):
        if self.end_date is None and self.duration_days is not None:
            self.end_date = timezone.now() + timedelta(days=int(self.duration_days))
        super().save(*args, **kwargs)

    @property
    def days_left(self) -> int:
        if self.end_date is None:
            return int(self.duration_days or 0)
        remaining = self.end_date - timezone.now()
        if remaining.total_seconds() <= 0:
            return 0
        # Partial days count as a full day left
        return remaining.days + (1 if remaining.seconds else 0)


class Reward(models.Model):
    """A reward tier backers can pick when donating."""

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="rewards",
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    delivery = models.CharField(max_length=128)
    backers = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["amount", "id"]

    def __str__(self) -> str:
        return f"{self.title} ({self.amount})"


class ProjectUpdate(models.Model):
    """News entry shown on a project page."""

    TYPE_MILESTONE = "milestone"
    TYPE_ANNOUNCEMENT = "announcement"
    TYPE_MEDIA = "media"
    TYPE_CHOICES = [
        (TYPE_MILESTONE, "Milestone"),
        (TYPE_ANNOUNCEMENT, "Announcement"),
        (TYPE_MEDIA, "Media"),
    ]

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="updates",
    )
    title = models.CharField(max_length=255)
    content = models.TextField()
    type = models.CharField(
        max_length=16,
        choices=TYPE_CHOICES,
        default=TYPE_ANNOUNCEMENT,
    )
    image = models.URLField(max_length=500, blank=True, default="")
    video_url = models.URLField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.project_id}: {self.title}"
