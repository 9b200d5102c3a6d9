"""
API views for the projects app.

Public endpoints list, filter and show live projects and their update
feeds.  Administrators post, edit and delete updates, and manage
projects and platform stats through the /api/admin/ endpoints.
"""
import logging

from django.contrib.auth import get_user_model
from django.db.models import Sum
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import IsPlatformAdmin
from payments.models import Payment
from .filters import ProjectFilter
from .models import Project, ProjectUpdate
from .serializers import (
    ProjectDetailSerializer,
    ProjectListSerializer,
    ProjectUpdateSerializer,
    ProjectWriteSerializer,
)

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 6


class ProjectViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public project catalogue.

    - GET /projects/                     active projects (filter, search, sort)
    - GET /projects/featured/            up to six featured active projects
    - GET /projects/{id}/                one project with rewards and updates
    - GET|POST /projects/{id}/updates/   update feed; posting requires admin
    - PUT|PATCH|DELETE /projects/{id}/updates/{update_id}/   admin only
    """
    permission_classes = [AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProjectFilter

    def get_queryset(self):
        qs = Project.objects.select_related("creator__profile")
        if self.action == "list":
            return qs.filter(status=Project.STATUS_ACTIVE)
        if self.action == "retrieve":
            return qs.prefetch_related("rewards", "updates")
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ProjectDetailSerializer
        if self.action in {"updates", "update_detail"}:
            return ProjectUpdateSerializer
        return ProjectListSerializer

    def get_permissions(self):
        if self.action == "update_detail" or (self.action == "updates" and self.request.method == "POST"):
            return [IsPlatformAdmin()]
        return super().get_permissions()

    @action(detail=False, methods=["get"], url_path="featured")
    def featured(self, request):
        qs = (
            Project.objects.filter(status=Project.STATUS_ACTIVE, featured=True)
            .select_related("creator__profile")
            .order_by("-created_at")[:FEATURED_LIMIT]
        )
        return Response(ProjectListSerializer(qs, many=True).data)

    @action(detail=True, methods=["get", "post"], url_path="updates")
    def updates(self, request, pk=None):
        project = get_object_or_404(Project, pk=pk)
        if request.method == "GET":
            return Response(ProjectUpdateSerializer(project.updates.all(), many=True).data)

        serializer = ProjectUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        update = serializer.save(project=project)
        logger.info("Posted update %s on project %s", update.pk, project.pk)
        return Response(ProjectUpdateSerializer(update).data, status=status.HTTP_201_CREATED)

    @action(
        detail=True,
        methods=["put", "patch", "delete"],
        url_path=r"updates/(?P<update_id>\d+)",
    )
    def update_detail(self, request, pk=None, update_id=None):
        project = get_object_or_404(Project, pk=pk)
        update = get_object_or_404(ProjectUpdate, pk=update_id, project=project)

        if request.method == "DELETE":
            update.delete()
            return Response(status=status.HTTP_204_NO_CONTENT)

        # Only the provided fields change, for PUT as well as PATCH
        serializer = ProjectUpdateSerializer(update, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)


class AdminProjectViewSet(viewsets.ModelViewSet):
    """Project management for platform administrators."""

    permission_classes = [IsPlatformAdmin]

    def get_queryset(self):
        qs = Project.objects.select_related("creator__profile").order_by("-created_at")
        if self.action == "retrieve":
            return qs.prefetch_related("rewards", "updates")
        return qs

    def get_serializer_class(self):
        if self.action in {"create", "update", "partial_update"}:
            return ProjectWriteSerializer
        if self.action == "retrieve":
            return ProjectDetailSerializer
        return ProjectListSerializer

    def perform_create(self, serializer):
        project = serializer.save(creator=self.request.user)
        logger.info("Admin %s created project %s", self.request.user.pk, project.pk)

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def perform_destroy(self, instance):
        logger.info("Admin %s deleted project %s", self.request.user.pk, instance.pk)
        instance.delete()


class AdminStatsView(APIView):
    permission_classes = [IsPlatformAdmin]

    def get(self, request):
        total_raised = (
            Payment.objects.filter(status=Payment.STATUS_COMPLETED)
            .aggregate(total=Sum("amount"))["total"]
        )
        return Response({
            "total_projects": Project.objects.count(),
            "active_projects": Project.objects.filter(status=Project.STATUS_ACTIVE).count(),
            "total_users": get_user_model().objects.count(),
            "total_payments": Payment.objects.count(),
            "total_raised": float(total_raised or 0),
        })
