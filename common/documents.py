"""
Raster PDF rendering with Pillow.

Receipts and certificates are drawn on a white Pillow image and saved
with Pillow's PDF writer.  Coordinates and font sizes are given in PDF
points (1/72 inch) so layouts read like a regular page description; the
canvas scales them to the raster resolution.
"""
from __future__ import annotations

import io
import logging

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

A4_PORTRAIT = (595, 842)
A4_LANDSCAPE = (842, 595)

_FONT_FILES = {
    False: ("DejaVuSans.ttf", "Arial.ttf"),
    True: ("DejaVuSans-Bold.ttf", "Arial Bold.ttf"),
}


class PdfCanvas:
    """A single-page drawing surface that renders to PDF bytes."""

    def __init__(self, page_size=A4_PORTRAIT, dpi: int = 150, background: str = "#ffffff"):
        self.width, self.height = page_size
        self.dpi = dpi
        self.scale = dpi / 72.0
        self.image = Image.new(
            "RGB", (self._px(self.width), self._px(self.height)), color=background
        )
        self.draw = ImageDraw.Draw(self.image)
        self._fonts = {}

    def _px(self, value) -> int:
        return int(round(value * self.scale))

    def font(self, size, bold: bool = False):
        key = (size, bold)
        if key not in self._fonts:
            pixel_size = self._px(size)
            loaded = None
            for name in _FONT_FILES[bold]:
                try:
                    loaded = ImageFont.truetype(name, pixel_size)
                    break
                except OSError:
                    continue
            if loaded is None:
                loaded = ImageFont.load_default(size=pixel_size)
            self._fonts[key] = loaded
        return self._fonts[key]

    def text_width(self, value: str, size, bold: bool = False) -> float:
        return self.draw.textlength(value, font=self.font(size, bold)) / self.scale

    def fit(self, value: str, size, max_width, bold: bool = False) -> str:
        """Truncate ``value`` with an ellipsis so it fits in ``max_width`` points."""
        if self.text_width(value, size, bold) <= max_width:
            return value
        while value and self.text_width(value + "...", size, bold) > max_width:
            value = value[:-1]
        return value.rstrip() + "..."

    def text(self, x, y, value: str, size=12, color="#000000", bold: bool = False, anchor="la"):
        self.draw.text(
            (self._px(x), self._px(y)),
            value,
            font=self.font(size, bold),
            fill=color,
            anchor=anchor,
        )

    def centered_text(self, y, value: str, size=12, color="#000000", bold: bool = False):
        value = self.fit(value, size, self.width - 80, bold)
        self.text(self.width / 2, y, value, size=size, color=color, bold=bold, anchor="ma")

    def rect(self, x, y, w, h, fill=None, outline=None, width=1, radius=0):
        box = [self._px(x), self._px(y), self._px(x + w), self._px(y + h)]
        stroke = max(1, self._px(width)) if outline else 0
        if radius:
            self.draw.rounded_rectangle(box, radius=self._px(radius), fill=fill, outline=outline, width=stroke)
        else:
            self.draw.rectangle(box, fill=fill, outline=outline, width=stroke)

    def line(self, x1, y1, x2, y2, color="#000000", width=1):
        self.draw.line(
            [(self._px(x1), self._px(y1)), (self._px(x2), self._px(y2))],
            fill=color,
            width=max(1, self._px(width)),
        )

    def polyline(self, points, color="#000000", width=1):
        self.draw.line(
            [(self._px(x), self._px(y)) for x, y in points],
            fill=color,
            width=max(1, self._px(width)),
            joint="curve",
        )

    def render(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PDF", resolution=float(self.dpi))
        data = buffer.getvalue()
        logger.debug("Rendered PDF page (%d bytes)", len(data))
        return data
