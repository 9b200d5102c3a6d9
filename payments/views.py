"""
Views for the payments app.

Donations run through Stripe in one of two flows:

* Payment-Intent: the SPA asks for a PaymentIntent, collects the card
  with Stripe Elements, then calls ``confirm`` which verifies the
  intent with Stripe and records the Payment.
* Checkout-Session: the SPA redirects to Stripe Checkout; the Payment
  is recorded by ``confirm-payment`` on the success page and/or by the
  ``checkout.session.completed`` webhook, whichever comes first.

All endpoints require authentication except the session lookup, the
checkout confirmation and the webhook, which relies solely on
signature verification.
"""
from __future__ import annotations

import json
import logging

import stripe
from django.conf import settings
from django.http import FileResponse, HttpResponse
from django.shortcuts import get_object_or_404
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from rest_framework import generics, permissions, status, views
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.response import Response

from common.currency import from_minor_units, to_minor_units
from common.exceptions import PaymentsNotConfigured
from common.permissions import IsOwnerOrPlatformAdmin, IsPlatformAdmin
from projects.models import Project, Reward
from . import stripe_client
from .models import Payment
from .serializers import (
    ConfirmCheckoutSerializer,
    ConfirmIntentSerializer,
    CreateCheckoutSessionSerializer,
    CreateIntentSerializer,
    PaymentSerializer,
)
from .services import CheckoutSessionError, record_checkout_session, record_payment
from .tasks import process_checkout_session

logger = logging.getLogger(__name__)


def _validate_reward(project, reward_id):
    if reward_id is None:
        return None
    reward = Reward.objects.filter(pk=reward_id, project=project).first()
    if reward is None:
        raise ValidationError({"reward_id": ["Reward does not belong to this project."]})
    return reward


class CreatePaymentIntentView(views.APIView):
    """Create a Stripe PaymentIntent for a donation."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        if not stripe_client.is_configured():
            raise PaymentsNotConfigured()
        serializer = CreateIntentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        project = get_object_or_404(Project, pk=data["project_id"])
        reward = _validate_reward(project, data.get("reward_id"))

        intent = stripe_client.create_payment_intent(
            amount_minor=to_minor_units(data["amount"]),
            currency=settings.PAYMENT_CURRENCY,
            metadata={
                "project_id": str(project.pk),
                "reward_id": str(reward.pk) if reward else "none",
                "user_id": str(request.user.pk),
            },
        )
        logger.info("Created PaymentIntent %s for project %s", intent["id"], project.pk)
        return Response({
            "client_secret": intent["client_secret"],
            "payment_intent_id": intent["id"],
        })


class ConfirmPaymentIntentView(views.APIView):
    """Verify a PaymentIntent with Stripe and record the donation."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ConfirmIntentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        intent = stripe_client.retrieve_payment_intent(data["payment_intent_id"])
        if intent["status"] != "succeeded":
            logger.warning("PaymentIntent %s not succeeded (status=%s)", intent["id"], intent["status"])
            return Response({"detail": "Payment not completed"}, status=status.HTTP_400_BAD_REQUEST)

        # Donor and reward come from the metadata written by create-intent
        metadata = intent.get("metadata") or {}
        if metadata.get("user_id") and metadata["user_id"] != str(request.user.pk):
            raise PermissionDenied("This payment was made by another user.")

        existing = Payment.objects.filter(stripe_payment_id=intent["id"]).first()
        if existing is not None:
            return Response({
                "detail": "Payment already recorded",
                "payment": PaymentSerializer(existing, context={"request": request}).data,
            })

        if metadata.get("project_id") and metadata["project_id"] != str(data["project_id"]):
            raise ValidationError({"project_id": ["Payment does not match this project."]})
        project = get_object_or_404(Project, pk=data["project_id"])

        amount = from_minor_units(intent.get("amount_received") or intent.get("amount"))
        result = record_payment(
            user=request.user,
            project_id=project.pk,
            stripe_payment_id=intent["id"],
            amount=amount,
            currency=(intent.get("currency") or settings.PAYMENT_CURRENCY).lower(),
            reward_id=metadata.get("reward_id"),
        )
        payment = PaymentSerializer(result.payment, context={"request": request}).data
        if not result.created:
            return Response({"detail": "Payment already recorded", "payment": payment})
        return Response({
            "detail": "Payment successful! Download your receipt.",
            "payment": payment,
            "receipt_url": payment["receipt_url"],
            "receipt_download_url": payment["receipt_download_url"],
        })


class MyPaymentsView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = PaymentSerializer
    pagination_class = None

    def get_queryset(self):
        return (
            Payment.objects.filter(user=self.request.user)
            .select_related("project", "reward", "user__profile")
            .order_by("-created_at")
        )


class AllPaymentsView(generics.ListAPIView):
    permission_classes = [IsPlatformAdmin]
    serializer_class = PaymentSerializer

    def get_queryset(self):
        return (
            Payment.objects.select_related("project", "reward", "user__profile")
            .order_by("-created_at")
        )


class ReceiptDownloadView(generics.GenericAPIView):
    """Stream the receipt PDF to the payment owner or an admin."""

    permission_classes = [IsOwnerOrPlatformAdmin]
    owner_field = "user"
    queryset = Payment.objects.all()

    def get(self, request, pk):
        payment = self.get_object()
        if not payment.receipt:
            raise NotFound("Receipt not found")
        try:
            handle = payment.receipt.open("rb")
        except FileNotFoundError:
            raise NotFound("Receipt not found")
        return FileResponse(
            handle,
            as_attachment=True,
            filename=f"receipt_{payment.pk}.pdf",
            content_type="application/pdf",
        )


class CreateCheckoutSessionView(views.APIView):
    """Start a Stripe Checkout Session for a donation."""

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = CreateCheckoutSessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        project = get_object_or_404(Project, pk=data["project_id"])
        reward = _validate_reward(project, data.get("reward_id"))

        frontend = settings.FRONTEND_URL
        product = {"name": f"Donation to: {project.title}", "description": project.description[:500]}
        if project.image:
            product["images"] = [project.image]

        session = stripe_client.create_checkout_session(
            mode="payment",
            payment_method_types=["card"],
            line_items=[{
                "price_data": {
                    "currency": settings.PAYMENT_CURRENCY,
                    "product_data": product,
                    "unit_amount": to_minor_units(data["amount"]),
                },
                "quantity": 1,
            }],
            success_url=f"{frontend}/payment/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{frontend}/project/{project.pk}",
            client_reference_id=str(project.pk),
            customer_email=request.user.email or None,
            metadata={
                "project_id": str(project.pk),
                "reward_id": str(reward.pk) if reward else "none",
                "user_id": str(request.user.pk),
            },
        )
        logger.info("Created checkout session %s for project %s", session["id"], project.pk)
        return Response({"session_id": session["id"], "url": session["url"]})


class CheckoutSessionDetailView(views.APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, session_id):
        session = stripe_client.retrieve_checkout_session(session_id)
        details = session.get("customer_details") or {}
        return Response({
            "id": session["id"],
            "status": session.get("payment_status"),
            "customer_email": details.get("email") or session.get("customer_email"),
            "amount_total": from_minor_units(session.get("amount_total")),
            "project_id": session.get("client_reference_id"),
        })


class ConfirmCheckoutPaymentView(views.APIView):
    """Called by the success page after Stripe Checkout redirects back."""

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = ConfirmCheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session_id = serializer.validated_data["session_id"]

        if Payment.objects.filter(stripe_payment_id=session_id).exists():
            return Response({"detail": "Payment already processed", "already_processed": True})

        session = stripe_client.retrieve_checkout_session(session_id)
        try:
            result = record_checkout_session(session)
        except CheckoutSessionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except Project.DoesNotExist:
            raise NotFound("Project not found")

        if not result.created:
            return Response({"detail": "Payment already processed", "already_processed": True})

        payment = result.payment
        project = Project.objects.get(pk=payment.project_id)
        data = {
            "payment_id": payment.pk,
            "project_id": project.pk,
            "new_raised_amount": project.raised,
            "new_backers_count": project.backers,
        }
        if payment.receipt:
            data["receipt_download_url"] = request.build_absolute_uri(reverse("payment-receipt", args=[payment.pk]))
        return Response({"detail": "Payment confirmed and project updated", **data})


@method_decorator(csrf_exempt, name="dispatch")
class StripeWebhookView(views.APIView):
    """Handle incoming Stripe webhook events."""

    authentication_classes = []
    permission_classes = []  # no authentication
    throttle_classes = []

    def post(self, request):
        payload = request.body
        secret = getattr(settings, "STRIPE_WEBHOOK_SECRET", "")
        if secret:
            sig_header = request.META.get("HTTP_STRIPE_SIGNATURE", "")
            try:
                stripe_client.construct_webhook_event(payload, sig_header, secret)
            except (ValueError, stripe.SignatureVerificationError) as exc:
                logger.warning("Rejected Stripe webhook: %s", exc)
                return HttpResponse(status=400)
        try:
            event = json.loads(payload)
            event_type = event["type"]
            data_obj = event["data"]["object"]
        except (ValueError, KeyError, TypeError):
            return HttpResponse(status=400)

        logger.info("Stripe webhook received: %s", event_type)
        if event_type == "checkout.session.completed":
            # Recorded asynchronously; idempotent on the session id
            process_checkout_session.delay(data_obj)
        elif event_type == "payment_intent.succeeded":
            logger.info("PaymentIntent %s succeeded", data_obj.get("id"))
        elif event_type == "payment_intent.payment_failed":
            pi_id = data_obj.get("id")
            if pi_id:
                # Mark payment failed
                Payment.objects.filter(stripe_payment_id=pi_id).update(status=Payment.STATUS_FAILED)
        return Response({"received": True})
