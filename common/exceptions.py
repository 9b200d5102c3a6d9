"""
API exceptions shared across apps.

Errors coming from the payment provider are surfaced as distinct HTTP
statuses so the SPA can tell a misconfigured deployment (503) from a
Stripe-side failure (502).
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class PaymentsNotConfigured(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Payment system is not configured. Please contact administrator."
    default_code = "payments_not_configured"


class PaymentProviderError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "The payment provider rejected the request."
    default_code = "payment_provider_error"


class InvalidStateError(APIException):
    """The object exists but is not in a state that allows the operation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This operation is not allowed in the current state."
    default_code = "invalid_state"
