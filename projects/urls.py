"""
URL configuration for the projects app.

``urlpatterns`` holds the public catalogue and is included under
``/api/``.  ``admin_urlpatterns`` holds project management and platform
stats and is included under ``/api/admin/``.
"""
from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import AdminProjectViewSet, AdminStatsView, ProjectViewSet

router = DefaultRouter()
router.include_root_view = False
router.register(r"projects", ProjectViewSet, basename="project")

admin_router = DefaultRouter()
admin_router.include_root_view = False
admin_router.register(r"projects", AdminProjectViewSet, basename="admin-project")

urlpatterns = [
    *router.urls,
]

admin_urlpatterns = [
    path("stats/", AdminStatsView.as_view(), name="admin-stats"),
    *admin_router.urls,
]
