"""
Payments app package for the FundRise crowdfunding backend.

This package records donations made through Stripe.  Two flows are
supported: a Payment-Intent flow confirmed by the client and a
Checkout-Session flow confirmed by redirect or by Stripe webhook.
Receipts are rendered to PDF once a payment is recorded.  See
payments/views.py for API details.
"""
