"""Flask application factory for the cover image form."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from flask import Flask

from cover_common.env import load_settings

from .routes import bp
from .services.public_files import PublicFileStore
from .services.records import RecordStore
from .services.temporary_files import TemporaryFileStore

logger = logging.getLogger(__name__)


def create_app(*, config: dict[str, Any] | None = None) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    app.config.from_mapping(
        MAX_CONTENT_LENGTH=16 * 1024 * 1024,
        **load_settings(),
    )
    if config:
        app.config.update(config)

    app.extensions["coverimage"] = {
        "records": RecordStore(Path(app.config["RECORDS_DIR"])),
        "public_files": PublicFileStore(Path(app.config["PUBLIC_DIR"])),
        "temporary_files": TemporaryFileStore(
            Path(app.config["TEMPORARY_DIR"]),
            sniff_uploads=bool(app.config["SNIFF_UPLOADS"]),
        ),
    }
    app.register_blueprint(bp)
    logger.debug("Cover image app configured for locales %s", app.config["SUPPORTED_LOCALES"])
    return app


def main() -> None:
    """Run the development server."""

    logging.basicConfig(level=logging.INFO)
    create_app().run()
