"""Environment helpers shared across components."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

_DOTENV_FILE = Path(".env")


def load_settings() -> dict[str, Any]:
    """Read COVER_* settings from the environment, after loading .env."""

    load_dotenv(_DOTENV_FILE)  # silently ignore if there is none, assume defaults.

    locales = split_multivalue_field(os.getenv("COVER_LOCALES", "en")) or ["en"]
    primary = os.getenv("COVER_PRIMARY_LOCALE", "").strip() or locales[0]
    return {
        "RECORDS_DIR": Path(os.getenv("COVER_RECORDS_DIR", "records")),
        "PUBLIC_DIR": Path(os.getenv("COVER_PUBLIC_DIR", "public")),
        "TEMPORARY_DIR": Path(os.getenv("COVER_TEMPORARY_DIR", "temporary")),
        "SUPPORTED_LOCALES": locales,
        "PRIMARY_LOCALE": primary,
        "DEFAULT_USER_ID": os.getenv("COVER_DEFAULT_USER_ID", "1").strip(),
        "SNIFF_UPLOADS": sniff_uploads_enabled(),
    }


def sniff_uploads_enabled() -> bool:
    value = os.getenv("COVER_SNIFF_UPLOADS", "")
    if not value.strip():
        return True
    return as_boolean(value, key="COVER_SNIFF_UPLOADS")


def as_boolean(value: str, *, key: str | None = None) -> bool:
    if not key:
        key = "key"
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(
        f"value {value} for {key} must be one of 1, 0, true, false, yes, no, on, off"
    )


def split_multivalue_field(raw_value: str) -> list[str]:
    values: list[str] = []
    for chunk in raw_value.splitlines():
        parts = [part.strip() for part in chunk.split(",") if part.strip()]
        values.extend(parts)
    return values
