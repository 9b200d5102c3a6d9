"""
Initial migration for the campaigns app.

Creates the CampaignRequest table holding proposals awaiting review,
the reviewer and review time, the rendered certificate and a link to
the project created on approval.
"""
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("projects", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CampaignRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("long_description", models.TextField(blank=True, default="")),
                ("category", models.CharField(max_length=64)),
                ("image", models.URLField(max_length=500)),
                ("goal", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "duration_days",
                    models.PositiveIntegerField(help_text="Requested campaign length in days"),
                ),
                ("featured", models.BooleanField(default=False)),
                ("rewards", models.JSONField(blank=True, default=list)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("admin_notes", models.TextField(blank=True, default="")),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("certificate", models.FileField(blank=True, null=True, upload_to="certificates/")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "creator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="campaign_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "project",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="campaign_request",
                        to="projects.project",
                    ),
                ),
                (
                    "reviewed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reviewed_campaign_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["creator", "status"], name="campaigns_c_creator_9a3b5d_idx"),
                    models.Index(fields=["status", "created_at"], name="campaigns_c_status_2c7e4f_idx"),
                ],
            },
        ),
    ]
