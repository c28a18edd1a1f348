"""Image type helpers shared across components."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

_IMAGE_EXTENSIONS = {
    "image/gif": ".gif",
    "image/jpeg": ".jpg",
    "image/pjpeg": ".jpg",
    "image/png": ".png",
    "image/x-png": ".png",
    "image/vnd.microsoft.icon": ".ico",
    "image/x-icon": ".ico",
    "image/x-ico": ".ico",
    "image/ico": ".ico",
    "image/svg+xml": ".svg",
    "image/svg": ".svg",
    "image/webp": ".webp",
}


def image_extension(file_type: str | None) -> str | None:
    """Return the extension (with leading dot) for an image MIME type."""

    if not file_type:
        return None
    normalized = file_type.split(";", 1)[0].strip().lower()
    return _IMAGE_EXTENSIONS.get(normalized)


def sniff_image_type(path: Path) -> str | None:
    """Identify an image by its content rather than its declared type."""

    try:
        with Image.open(path) as img:
            image_format = img.format
    except (UnidentifiedImageError, OSError):
        return None
    if not image_format:
        return None
    return Image.MIME.get(image_format.upper())


def cover_file_name(submission_id: int | str, locale: str, extension: str) -> str:
    return f"article_{submission_id}_cover_{locale}{extension}"
