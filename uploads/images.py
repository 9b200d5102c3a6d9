"""
Project image handling.

Uploaded files are checked with Pillow (the decoded format must be one
of the allowed ones, whatever the file name says), downscaled to fit
``UPLOAD_MAX_DIMENSIONS`` and saved through ``default_storage`` under
``UPLOAD_FOLDER`` (S3 when a bucket is configured, the local media root
otherwise).
"""
from __future__ import annotations

import io
import logging
import os
from uuid import uuid4

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image, ImageSequence, UnidentifiedImageError
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = {
    "JPEG": "jpg",
    "PNG": "png",
    "GIF": "gif",
    "WEBP": "webp",
}


def _reencode(image: Image.Image, fmt: str) -> bytes:
    buffer = io.BytesIO()
    if fmt == "JPEG" and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    options = {"quality": 85} if fmt in ("JPEG", "WEBP") else {}
    image.save(buffer, format=fmt, **options)
    return buffer.getvalue()


def _reencode_animation(image: Image.Image, fmt: str, size) -> bytes:
    frames, durations = [], []
    for frame in ImageSequence.Iterator(image):
        durations.append(frame.info.get("duration", image.info.get("duration", 100)))
        frame = frame.copy()
        frame.thumbnail(size)
        frames.append(frame)
    buffer = io.BytesIO()
    frames[0].save(
        buffer,
        format=fmt,
        save_all=True,
        append_images=frames[1:],
        duration=durations,
        loop=image.info.get("loop", 0),
    )
    return buffer.getvalue()


def store_image(upload, field: str = "image") -> dict:
    """Validate, resize and store one uploaded image; returns its public descriptor."""
    if upload.size > settings.UPLOAD_MAX_BYTES:
        raise ValidationError({field: f"{upload.name}: file exceeds the {settings.UPLOAD_MAX_BYTES // (1024 * 1024)}MB limit"})

    raw = upload.read()
    try:
        with Image.open(io.BytesIO(raw)) as candidate:
            candidate.verify()
        image = Image.open(io.BytesIO(raw))
        fmt = image.format
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError({field: f"{upload.name}: only image files are allowed (jpg, jpeg, png, gif, webp)"})
    if fmt not in ALLOWED_FORMATS:
        raise ValidationError({field: f"{upload.name}: only image files are allowed (jpg, jpeg, png, gif, webp)"})

    max_w, max_h = settings.UPLOAD_MAX_DIMENSIONS
    if image.width > max_w or image.height > max_h:
        if getattr(image, "is_animated", False):
            raw = _reencode_animation(image, fmt, (max_w, max_h))
        else:
            image.thumbnail((max_w, max_h))
            raw = _reencode(image, fmt)

    public_id = f"{settings.UPLOAD_FOLDER}/{uuid4().hex}"
    saved = default_storage.save(f"{public_id}.{ALLOWED_FORMATS[fmt]}", ContentFile(raw))
    logger.info("Stored image %s (%d bytes)", saved, len(raw))
    return {
        "image_url": default_storage.url(saved),
        "public_id": os.path.splitext(saved)[0],
        "filename": upload.name,
    }
