from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image
from werkzeug.datastructures import FileStorage

import cover_common.env as env_module
from coverimage.app import create_app
from coverimage.services import PublicFileStore, RecordStore, TemporaryFileStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch) -> Path:
    """Keep a developer's .env and COVER_* variables out of the tests."""

    env_path = tmp_path / ".env"
    monkeypatch.setattr(env_module, "_DOTENV_FILE", env_path)
    for key in (
        "COVER_RECORDS_DIR",
        "COVER_PUBLIC_DIR",
        "COVER_TEMPORARY_DIR",
        "COVER_LOCALES",
        "COVER_PRIMARY_LOCALE",
        "COVER_DEFAULT_USER_ID",
        "COVER_SNIFF_UPLOADS",
    ):
        # setenv first so values loaded from .env are undone after the test
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return env_path


@pytest.fixture()
def stores(tmp_path):
    return {
        "records": RecordStore(tmp_path / "records"),
        "public_files": PublicFileStore(tmp_path / "public"),
        "temporary_files": TemporaryFileStore(tmp_path / "temporary"),
    }


@pytest.fixture()
def app(tmp_path):
    return create_app(
        config={
            "TESTING": True,
            "RECORDS_DIR": tmp_path / "records",
            "PUBLIC_DIR": tmp_path / "public",
            "TEMPORARY_DIR": tmp_path / "temporary",
            "SUPPORTED_LOCALES": ["en", "fr"],
            "PRIMARY_LOCALE": "en",
            "DEFAULT_USER_ID": "7",
        }
    )


def png_bytes(color: str = "white", image_format: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (16, 16), color=color).save(buffer, format=image_format)
    return buffer.getvalue()


def make_upload(
    data: bytes, filename: str = "cover.png", content_type: str = "image/png"
) -> FileStorage:
    return FileStorage(
        stream=io.BytesIO(data), filename=filename, content_type=content_type
    )
