"""
Views for the users app.

Authentication endpoints (register, email login, logout, current user)
and the per-user dashboard: aggregate stats, created and backed
projects, chart-ready analytics, and profile/password updates.
"""
import logging

from django.contrib.auth import update_session_auth_hash
from django.db.models import Count, Sum
from django.db.models.functions import TruncMonth
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView

from campaigns.models import CampaignRequest
from payments.models import Payment
from payments.serializers import PaymentSerializer
from projects.models import Project
from projects.serializers import ProjectListSerializer
from .serializers import (
    ChangePasswordSerializer,
    EmailTokenObtainPairSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)

STATUS_COLORS = [
    (Project.STATUS_ACTIVE, "Active", "#10b981"),
    (Project.STATUS_SUCCESSFUL, "Successful", "#3b82f6"),
    (Project.STATUS_DRAFT, "Draft", "#6b7280"),
    (Project.STATUS_FAILED, "Failed", "#ef4444"),
]


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered user %s", user.pk)

        # issue JWT (simplejwt)
        refresh = RefreshToken.for_user(user)
        payload = {
            "user": serializer.data,
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }
        return Response(payload, status=status.HTTP_201_CREATED)


class EmailTokenObtainPairView(TokenObtainPairView):
    """
    Obtain JWT tokens using email + password.
    """
    permission_classes = [permissions.AllowAny]
    serializer_class = EmailTokenObtainPairSerializer


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        try:
            refresh_token = request.data["refresh"]
            token = RefreshToken(refresh_token)
            token.blacklist()
            return Response({"detail": "Successfully logged out."}, status=status.HTTP_205_RESET_CONTENT)
        except KeyError:
            return Response({"error": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)
        except TokenError:
            return Response({"error": "Invalid or expired token."}, status=status.HTTP_400_BAD_REQUEST)


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

class UserStatsView(APIView):
    """Headline numbers for the dashboard cards."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = request.user
        projects = Project.objects.filter(creator=user)
        totals = projects.aggregate(total_raised=Sum("raised"), total_backers=Sum("backers"), count=Count("id"))
        projects_created = totals["count"] or 0
        successful = projects.filter(status=Project.STATUS_SUCCESSFUL).count()
        success_rate = round(successful * 100 / projects_created) if projects_created else 0

        payments = Payment.objects.filter(user=user, status=Payment.STATUS_COMPLETED)
        contributed = payments.aggregate(total=Sum("amount"), projects=Count("project", distinct=True))

        requests_by_status = dict(
            CampaignRequest.objects.filter(creator=user)
            .values_list("status")
            .annotate(n=Count("id"))
            .order_by()
        )

        return Response({
            "total_raised": float(totals["total_raised"] or 0),
            "total_backers": totals["total_backers"] or 0,
            "projects_created": projects_created,
            "success_rate": success_rate,
            "total_contributed": float(contributed["total"] or 0),
            "projects_backed": contributed["projects"] or 0,
            "campaign_requests": {
                "total": sum(requests_by_status.values()),
                "pending": requests_by_status.get(CampaignRequest.STATUS_PENDING, 0),
                "approved": requests_by_status.get(CampaignRequest.STATUS_APPROVED, 0),
                "rejected": requests_by_status.get(CampaignRequest.STATUS_REJECTED, 0),
            },
        })


class UserProjectsView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ProjectListSerializer
    pagination_class = None

    def get_queryset(self):
        return (
            Project.objects.filter(creator=self.request.user)
            .select_related("creator__profile")
            .order_by("-created_at")
        )


class UserBackedProjectsView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = PaymentSerializer
    pagination_class = None

    def get_queryset(self):
        return (
            Payment.objects.filter(user=self.request.user, status=Payment.STATUS_COMPLETED)
            .select_related("project", "reward", "user__profile")
            .order_by("-created_at")
        )


class UserAnalyticsView(APIView):
    """Per-month series for the dashboard charts."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = request.user
        projects = Project.objects.filter(creator=user)

        by_month = (
            projects.annotate(month=TruncMonth("created_at"))
            .values("month")
            .annotate(raised=Sum("raised"), goal=Sum("goal"), backers=Sum("backers"))
            .order_by("month")
        )
        funding_progress = []
        backer_growth = []
        cumulative = 0
        for row in by_month:
            label = row["month"].strftime("%b %Y")
            funding_progress.append({
                "month": label,
                "raised": float(row["raised"] or 0),
                "goal": float(row["goal"] or 0),
            })
            cumulative += row["backers"] or 0
            backer_growth.append({"month": label, "backers": cumulative})

        counts = dict(projects.values_list("status").annotate(n=Count("id")).order_by())
        project_status = [
            {"name": name, "value": counts.get(key, 0), "color": color}
            for key, name, color in STATUS_COLORS
            if counts.get(key, 0) > 0
        ]

        contributions = (
            Payment.objects.filter(user=user, status=Payment.STATUS_COMPLETED)
            .annotate(month=TruncMonth("created_at"))
            .values("month")
            .annotate(contributions=Count("id"))
            .order_by("month")
        )
        monthly_contributions = [
            {"month": row["month"].strftime("%b %Y"), "contributions": row["contributions"]}
            for row in contributions
        ]

        categories = projects.values("category").annotate(raised=Sum("raised")).order_by("category")
        category_performance = [
            {"category": row["category"], "raised": float(row["raised"] or 0)}
            for row in categories
        ]

        return Response({
            "funding_progress": funding_progress,
            "backer_growth": backer_growth,
            "project_status": project_status,
            "monthly_contributions": monthly_contributions,
            "category_performance": category_performance,
        })


class UserProfileView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ProfileUpdateSerializer

    def put(self, request):
        serializer = self.get_serializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response({"detail": "Profile updated successfully", "user": UserSerializer(user).data})


class UserPasswordView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ChangePasswordSerializer

    def put(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_password(serializer.validated_data["new_password"])
        user.save()
        # keep the current browser session alive after the hash changes
        update_session_auth_hash(request, user)
        logger.info("Password changed for user %s", user.pk)
        return Response({"detail": "Password updated successfully"}, status=status.HTTP_200_OK)
