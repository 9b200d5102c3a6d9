"""
URL configuration for the FundRise crowdfunding backend.
All API endpoints are registered under the `/api/` prefix.
Authentication endpoints are nested under `/api/auth/`.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.views import (
    SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
)

from fundrise_backend.views import health, index
from payments.urls import checkout_urlpatterns, confirm_urlpatterns, webhook_urlpatterns
from projects.urls import admin_urlpatterns
from users.urls import dashboard_urlpatterns

urlpatterns = [
    path("", index, name="index"),
    path("admin/", admin.site.urls),

    path("api/", RedirectView.as_view(pattern_name="swagger-ui", permanent=False)),
    path("api/health/", health, name="health"),

    #  Swagger/Redoc
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    # Auth & dashboard
    path("api/auth/", include("users.urls")),
    path("api/user/", include(dashboard_urlpatterns)),

    # Projects, admin, campaign requests
    path("api/", include("projects.urls")),
    path("api/admin/", include(admin_urlpatterns)),
    path("api/campaign-requests/", include("campaigns.urls")),

    # Payments
    path("api/payments/", include("payments.urls")),
    path("api/checkout/", include(checkout_urlpatterns)),
    path("api/payment-confirm/", include(confirm_urlpatterns)),
    path("api/webhook/", include(webhook_urlpatterns)),

    path("api/upload/", include("uploads.urls")),
]

if settings.DEBUG:
    # Only serve MEDIA_URL via Django if it's a local path (avoid trying to serve S3)
    if getattr(settings, "MEDIA_URL", "").startswith("/"):
        urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
