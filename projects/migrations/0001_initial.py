"""
Initial migration for the projects app.

Creates the Project, Reward and ProjectUpdate tables.  Rewards and
updates cascade with their project; projects cascade with their
creator.
"""
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("long_description", models.TextField(blank=True, default="")),
                ("category", models.CharField(db_index=True, max_length=64)),
                ("image", models.URLField(max_length=500)),
                ("goal", models.DecimalField(decimal_places=2, max_digits=12)),
                ("raised", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("backers", models.PositiveIntegerField(default=0)),
                (
                    "duration_days",
                    models.PositiveIntegerField(help_text="Campaign length in days"),
                ),
                ("end_date", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("successful", "Successful"),
                            ("failed", "Failed"),
                            ("draft", "Draft"),
                        ],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("verified", models.BooleanField(default=True)),
                ("featured", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "creator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="projects",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "featured"], name="projects_pr_status_3f1c2a_idx"),
                    models.Index(fields=["status", "end_date"], name="projects_pr_status_8d4e7b_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Reward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("delivery", models.CharField(max_length=128)),
                ("backers", models.PositiveIntegerField(default=0)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rewards",
                        to="projects.project",
                    ),
                ),
            ],
            options={
                "ordering": ["amount", "id"],
            },
        ),
        migrations.CreateModel(
            name="ProjectUpdate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("content", models.TextField()),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("milestone", "Milestone"),
                            ("announcement", "Announcement"),
                            ("media", "Media"),
                        ],
                        default="announcement",
                        max_length=16,
                    ),
                ),
                ("image", models.URLField(blank=True, default="", max_length=500)),
                ("video_url", models.URLField(blank=True, default="", max_length=500)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="updates",
                        to="projects.project",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
