"""Shared helpers for the cover image service."""

from .env import as_boolean, load_settings, sniff_uploads_enabled, split_multivalue_field
from .mime import cover_file_name, image_extension, sniff_image_type

__all__ = [
    "as_boolean",
    "cover_file_name",
    "image_extension",
    "load_settings",
    "sniff_image_type",
    "sniff_uploads_enabled",
    "split_multivalue_field",
]
