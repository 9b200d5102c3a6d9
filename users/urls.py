"""
Authentication and dashboard endpoints for the users app.

`urlpatterns` is mounted at /api/auth/ and exposes registration,
email + password JWT login, logout and the current user.
`dashboard_urlpatterns` is mounted at /api/user/ and serves the
signed-in user's dashboard.
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    EmailTokenObtainPairView,
    LogoutView,
    MeView,
    RegisterView,
    UserAnalyticsView,
    UserBackedProjectsView,
    UserPasswordView,
    UserProfileView,
    UserProjectsView,
    UserStatsView,
)

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    # Email + password login (returns refresh + access)
    path("login/", EmailTokenObtainPairView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
]

dashboard_urlpatterns = [
    path("stats/", UserStatsView.as_view(), name="user-stats"),
    path("projects/", UserProjectsView.as_view(), name="user-projects"),
    path("backed-projects/", UserBackedProjectsView.as_view(), name="user-backed-projects"),
    path("analytics/", UserAnalyticsView.as_view(), name="user-analytics"),
    path("profile/", UserProfileView.as_view(), name="user-profile"),
    path("password/", UserPasswordView.as_view(), name="user-password"),
]
