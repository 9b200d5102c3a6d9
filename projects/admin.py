from django.contrib import admin

from .models import Project, ProjectUpdate, Reward


class RewardInline(admin.TabularInline):
    model = Reward
    extra = 0
    readonly_fields = ("backers",)


class ProjectUpdateInline(admin.StackedInline):
    model = ProjectUpdate
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "status", "goal", "raised", "backers", "featured", "end_date", "creator")
    list_filter = ("status", "category", "featured", "verified")
    search_fields = ("title", "description", "creator__email")
    readonly_fields = ("raised", "backers", "created_at", "updated_at")
    inlines = [RewardInline, ProjectUpdateInline]


@admin.register(ProjectUpdate)
class ProjectUpdateAdmin(admin.ModelAdmin):
    list_display = ("title", "project", "type", "created_at")
    list_filter = ("type",)
    search_fields = ("title", "content", "project__title")
