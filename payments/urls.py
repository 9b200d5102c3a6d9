"""
URL configuration for the payments app.

Four groups are included by the project-level URL config:

* ``urlpatterns`` under ``/api/payments/`` (Payment-Intent flow, listings, receipts)
* ``checkout_urlpatterns`` under ``/api/checkout/``
* ``confirm_urlpatterns`` under ``/api/payment-confirm/``
* ``webhook_urlpatterns`` under ``/api/webhook/``
"""
from django.urls import path

from .views import (
    AllPaymentsView,
    CheckoutSessionDetailView,
    ConfirmCheckoutPaymentView,
    ConfirmPaymentIntentView,
    CreateCheckoutSessionView,
    CreatePaymentIntentView,
    MyPaymentsView,
    ReceiptDownloadView,
    StripeWebhookView,
)

urlpatterns = [
    path("create-intent/", CreatePaymentIntentView.as_view(), name="payment-create-intent"),
    path("confirm/", ConfirmPaymentIntentView.as_view(), name="payment-confirm"),
    path("my-payments/", MyPaymentsView.as_view(), name="payment-mine"),
    path("all/", AllPaymentsView.as_view(), name="payment-all"),
    path("receipt/<int:pk>/", ReceiptDownloadView.as_view(), name="payment-receipt"),
]

checkout_urlpatterns = [
    path("create-session/", CreateCheckoutSessionView.as_view(), name="checkout-create-session"),
    path("session/<str:session_id>/", CheckoutSessionDetailView.as_view(), name="checkout-session"),
]

confirm_urlpatterns = [
    path("confirm-payment/", ConfirmCheckoutPaymentView.as_view(), name="checkout-confirm-payment"),
]

webhook_urlpatterns = [
    path("stripe/", StripeWebhookView.as_view(), name="stripe-webhook"),
]
