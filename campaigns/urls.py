"""
URL configuration for the campaigns app, included under
``/api/campaign-requests/``.
"""
from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import CampaignRequestViewSet, CertificateDownloadView

router = DefaultRouter()
router.include_root_view = False
router.register(r"", CampaignRequestViewSet, basename="campaign-request")

urlpatterns = [
    # Must precede the router so "certificate" is not read as a request id
    path("certificate/<int:pk>/", CertificateDownloadView.as_view(), name="campaign-request-certificate"),
    *router.urls,
]
