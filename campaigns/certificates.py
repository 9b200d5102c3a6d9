"""
Campaign approval certificate (A4 landscape PDF).
"""
from __future__ import annotations

from django.conf import settings
from django.utils import timezone

from common.currency import format_inr
from common.documents import A4_LANDSCAPE, PdfCanvas
from users.models import display_name

PRIMARY = "#003366"
ACCENT = "#ff9900"
TEXT_MAIN = "#333333"
TEXT_SUBTLE = "#666666"

MARGIN = 36
INSET = 18
FLAIR = 40


def render_certificate(campaign_request, approved_at=None) -> bytes:
    page = PdfCanvas(A4_LANDSCAPE)
    width, height = page.width, page.height
    brand = getattr(settings, "PLATFORM_NAME", "FundRise")
    approved_at = timezone.localtime(approved_at or timezone.now())

    page.rect(MARGIN, MARGIN, width - 2 * MARGIN, height - 2 * MARGIN, outline=PRIMARY, width=1)
    page.rect(
        MARGIN + INSET, MARGIN + INSET,
        width - 2 * (MARGIN + INSET), height - 2 * (MARGIN + INSET),
        outline=ACCENT, width=0.5,
    )
    # corner flair
    page.polyline([(MARGIN, MARGIN + FLAIR), (MARGIN, MARGIN), (MARGIN + FLAIR, MARGIN)], color=ACCENT, width=3)
    page.polyline(
        [
            (width - MARGIN, height - MARGIN - FLAIR),
            (width - MARGIN, height - MARGIN),
            (width - MARGIN - FLAIR, height - MARGIN),
        ],
        color=ACCENT,
        width=3,
    )

    page.centered_text(78, brand, size=14, color=PRIMARY, bold=True)
    page.centered_text(104, "AWARDED FOR OUTSTANDING CONTRIBUTION", size=16, color=TEXT_SUBTLE)
    page.centered_text(126, "CERTIFICATE", size=48, color=PRIMARY, bold=True)

    page.centered_text(196, "This distinguished honor is presented to", size=14, color=TEXT_MAIN)
    page.centered_text(220, display_name(campaign_request.creator).upper(), size=36, color=ACCENT, bold=True)
    page.centered_text(274, "For the successful Launch & Leadership of the campaign:", size=14, color=TEXT_MAIN)
    page.centered_text(298, f"“{campaign_request.title}”", size=24, color=PRIMARY, bold=True)

    page.line(width / 2 - 50, 342, width / 2 + 50, 342, color=ACCENT, width=3)

    details = " | ".join([
        f"Category: {campaign_request.category}",
        f"Goal: Rs. {format_inr(campaign_request.goal)}",
        f"ID: CR-{campaign_request.pk:06d}",
    ])
    page.centered_text(356, details, size=12, color=TEXT_SUBTLE)

    signature_y = height - 130
    left_x, right_x = 150, width - 350
    page.text(width / 2, signature_y - 40, f"Date: {approved_at:%B %d, %Y}", size=14, color=TEXT_SUBTLE, anchor="ma")
    page.line(left_x, signature_y, left_x + 200, signature_y, color=TEXT_SUBTLE, width=1.5)
    page.line(right_x, signature_y, right_x + 200, signature_y, color=TEXT_SUBTLE, width=1.5)
    page.text(left_x + 100, signature_y + 10, "Campaign Reference", size=12, color=TEXT_MAIN, bold=True, anchor="ma")
    page.text(right_x + 100, signature_y + 10, "Authorized Platform Signature", size=12, color=TEXT_MAIN, bold=True, anchor="ma")

    page.centered_text(
        height - MARGIN - INSET - 40,
        f"{brand} - Empowering Visionaries | Integrity. Innovation. Impact.",
        size=10, color=PRIMARY, bold=True,
    )
    page.centered_text(
        height - MARGIN - INSET - 26,
        f"This certificate is digitally secured and verifiable via our platform. (c) {approved_at.year} {brand}",
        size=8, color=TEXT_SUBTLE,
    )
    return page.render()
