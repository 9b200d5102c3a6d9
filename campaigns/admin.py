from django.contrib import admin

from .models import CampaignRequest


@admin.register(CampaignRequest)
class CampaignRequestAdmin(admin.ModelAdmin):
    list_display = ("title", "creator", "category", "goal", "status", "reviewed_by", "created_at")
    list_filter = ("status", "category")
    search_fields = ("title", "description", "creator__email")
    readonly_fields = ("reviewed_by", "reviewed_at", "project", "certificate", "created_at", "updated_at")
