"""
API views for the campaigns app.

Users submit campaign requests and follow them under ``my-requests``;
administrators list every request, approve or reject pending ones and
may delete any.  The approval certificate is downloadable by the
creator and by administrators.
"""
import logging

from django.http import FileResponse
from django.shortcuts import get_object_or_404
from django.urls import reverse
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import InvalidStateError
from common.permissions import IsOwnerOrPlatformAdmin, IsPlatformAdmin, is_platform_admin
from projects.serializers import ProjectDetailSerializer
from users.models import display_name
from .models import CampaignRequest
from .serializers import CampaignRequestSerializer, ReviewSerializer
from .services import approve_campaign_request, reject_campaign_request

logger = logging.getLogger(__name__)


class CampaignRequestViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    - POST   /campaign-requests/                submit (any signed-in user)
    - GET    /campaign-requests/my-requests/    caller's requests
    - GET    /campaign-requests/?status=...     all requests (admin)
    - GET    /campaign-requests/{id}/           creator or admin
    - PUT|POST /campaign-requests/{id}/approve/ admin
    - PUT|POST /campaign-requests/{id}/reject/  admin
    - DELETE /campaign-requests/{id}/           creator while pending, or admin
    """
    serializer_class = CampaignRequestSerializer
    owner_field = "creator"
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["status"]

    def get_queryset(self):
        return CampaignRequest.objects.select_related(
            "creator__profile", "reviewed_by__profile"
        ).order_by("-created_at")

    def get_permissions(self):
        if self.action in {"list", "approve", "reject"}:
            return [IsPlatformAdmin()]
        if self.action in {"retrieve", "destroy"}:
            return [IsOwnerOrPlatformAdmin()]
        return [permissions.IsAuthenticated()]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        campaign_request = serializer.save(creator=request.user)
        logger.info("Campaign request %s submitted by user %s", campaign_request.pk, request.user.pk)
        return Response(
            {
                "detail": "Campaign request submitted successfully. It will be reviewed by an admin.",
                "campaign_request": serializer.data,
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"], url_path="my-requests")
    def my_requests(self, request):
        qs = self.get_queryset().filter(creator=request.user)
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=True, methods=["put", "post"], url_path="approve")
    def approve(self, request, pk=None):
        campaign_request = self.get_object()
        review = ReviewSerializer(data=request.data)
        review.is_valid(raise_exception=True)
        campaign_request = approve_campaign_request(
            campaign_request, request.user, review.validated_data["admin_notes"]
        )
        data = self.get_serializer(campaign_request).data
        return Response({
            "detail": "Campaign request approved, project created, and certificate generated successfully!",
            "campaign_request": data,
            "project": ProjectDetailSerializer(campaign_request.project, context={"request": request}).data,
            "certificate_url": data["certificate_url"],
            "certificate_download_url": request.build_absolute_uri(
                reverse("campaign-request-certificate", args=[campaign_request.pk])
            ),
        })

    @action(detail=True, methods=["put", "post"], url_path="reject")
    def reject(self, request, pk=None):
        campaign_request = self.get_object()
        review = ReviewSerializer(data=request.data)
        review.is_valid(raise_exception=True)
        campaign_request = reject_campaign_request(
            campaign_request, request.user, review.validated_data["admin_notes"]
        )
        return Response({
            "detail": "Campaign request rejected",
            "campaign_request": self.get_serializer(campaign_request).data,
        })

    def perform_destroy(self, instance):
        if not is_platform_admin(self.request.user) and not instance.is_pending:
            raise InvalidStateError("You can only delete pending requests")
        logger.info("Campaign request %s deleted by user %s", instance.pk, self.request.user.pk)
        instance.delete()


class CertificateDownloadView(APIView):
    """Stream the approval certificate PDF."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        campaign_request = get_object_or_404(
            CampaignRequest.objects.select_related("creator__profile"), pk=pk
        )
        if campaign_request.creator_id != request.user.id and not is_platform_admin(request.user):
            raise PermissionDenied("Not authorized to download this certificate")
        if campaign_request.status != CampaignRequest.STATUS_APPROVED:
            raise InvalidStateError("Certificate is only available for approved campaigns")
        if not campaign_request.certificate:
            raise NotFound("Certificate not found")
        try:
            handle = campaign_request.certificate.open("rb")
        except FileNotFoundError:
            raise NotFound("Certificate not found")
        name = display_name(campaign_request.creator).replace(" ", "_")
        return FileResponse(
            handle,
            as_attachment=True,
            filename=f"FundRise_Certificate_{name}.pdf",
            content_type="application/pdf",
        )
