"""
Payment receipt PDF.

``render_receipt`` draws a single A4 page: brand header, receipt id,
date, backer, the project backed, the amount and the Stripe reference.
``issue_receipt`` renders it and attaches the file to the payment.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.core.files.base import ContentFile
from django.utils import timezone

from common.currency import format_inr
from common.documents import A4_PORTRAIT, PdfCanvas
from users.models import display_name

logger = logging.getLogger(__name__)

BRAND_BLUE = "#3b82f6"
DARK = "#1e293b"
MUTED = "#64748b"
GREEN = "#16a34a"


def receipt_number(payment) -> str:
    return f"FR-{payment.created_at:%Y%m%d}-{payment.pk:06d}"


def render_receipt(payment) -> bytes:
    page = PdfCanvas(A4_PORTRAIT)
    width = page.width
    brand = getattr(settings, "PLATFORM_NAME", "FundRise")

    page.rect(0, 0, width, 90, fill=BRAND_BLUE)
    page.text(50, 28, brand, size=26, color="#ffffff", bold=True)
    page.text(50, 62, "Empowering Innovation Together", size=10, color="#e0f2fe")

    page.text(50, 110, "PAYMENT RECEIPT", size=22, color=DARK, bold=True)
    page.rect(width - 220, 110, 170, 35, fill="#dbeafe", outline=BRAND_BLUE, radius=5)
    page.text(width - 210, 116, "Receipt ID", size=9, color="#1e40af")
    page.text(width - 210, 129, receipt_number(payment), size=10, color="#1e40af", bold=True)

    page.line(50, 165, width - 50, 165, color="#e5e7eb", width=2)

    paid_at = timezone.localtime(payment.created_at)
    rows = [
        ("Date & Time:", paid_at.strftime("%B %d, %Y %I:%M %p")),
        ("Backer Name:", display_name(payment.user)),
        ("Email:", payment.user.email or "-"),
    ]
    y = 185
    for label, value in rows:
        page.text(50, y, label, size=11, color=MUTED, bold=True)
        page.text(180, y, page.fit(value, 11, width - 230), size=11, color=DARK)
        y += 22

    y += 10
    page.rect(50, y, width - 100, 60, fill="#f0f9ff", outline=BRAND_BLUE, radius=8)
    page.text(70, y + 10, "Project Backed", size=12, color="#1e40af", bold=True)
    page.text(70, y + 30, page.fit(payment.project.title, 14, width - 140, bold=True), size=14, color=DARK, bold=True)
    y += 80

    page.text(50, y, "Payment Details", size=14, color=DARK, bold=True)
    y += 25
    page.rect(50, y, width - 100, 28, fill="#f1f5f9")
    page.text(70, y + 8, "Description", size=10, color="#475569", bold=True)
    page.text(width - 150, y + 8, "Amount", size=10, color="#475569", bold=True)
    y += 28

    description = "Contribution Amount"
    if payment.reward_id:
        description = page.fit(f"Contribution ({payment.reward.title})", 11, width - 240)
    amount = format_inr(payment.amount, symbol="Rs. ")
    page.text(70, y + 8, description, size=11, color=DARK)
    page.text(width - 150, y + 8, amount, size=11, color=GREEN, bold=True)
    y += 36

    page.line(50, y, width - 50, y, color="#cbd5e1")
    y += 15
    page.text(70, y, "Total Paid", size=14, color=DARK, bold=True)
    page.text(width - 150, y, amount, size=16, color=GREEN, bold=True)
    y += 35

    page.text(50, y, f"Status: {payment.get_status_display()}", size=10, color=MUTED)
    page.text(50, y + 18, page.fit(f"Transaction ID: {payment.stripe_payment_id}", 10, width - 100), size=10, color=MUTED)

    y = page.height - 120
    page.line(50, y, width - 50, y, color="#e5e7eb")
    page.centered_text(y + 20, "Thank You for Your Support!", size=12, color=BRAND_BLUE, bold=True)
    page.centered_text(y + 40, "This is a computer-generated receipt and does not require a signature.", size=9, color=MUTED)
    page.rect(0, page.height - 35, width, 35, fill="#f8fafc")
    page.centered_text(page.height - 24, f"(c) {paid_at.year} {brand}. All rights reserved.", size=8, color="#94a3b8")

    return page.render()


def issue_receipt(payment) -> None:
    """Render the receipt and store it on ``payment.receipt``."""
    data = render_receipt(payment)
    payment.receipt.save(f"receipt_{payment.pk}.pdf", ContentFile(data), save=False)
    payment.save(update_fields=["receipt", "updated_at"])
    logger.info("Generated receipt for payment %s", payment.pk)
