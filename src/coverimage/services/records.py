"""JSON-file record store for submissions and their publications.

Records live under ``<records_dir>/submissions/<id>.json`` and
``<records_dir>/publications/<id>.json``. Writes replace the whole record,
so concurrent updates to the same publication are last-write-wins.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CoverImage:
    upload_name: str
    alt_text: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CoverImage:
        return cls(
            upload_name=str(data.get("uploadName", "")),
            alt_text=str(data.get("altText", "")),
        )

    def to_dict(self) -> dict[str, str]:
        return {"uploadName": self.upload_name, "altText": self.alt_text}


@dataclass
class Publication:
    """A version of a submission; carries cover images keyed by locale."""

    id: int
    submission_id: int
    cover_image: dict[str, CoverImage] = field(default_factory=dict)

    def cover_image_for(self, locale: str) -> CoverImage | None:
        return self.cover_image.get(locale)

    def set_cover_image(self, locale: str, cover: CoverImage) -> None:
        self.cover_image[locale] = cover

    def clear_cover_image(self) -> None:
        self.cover_image = {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Publication:
        raw_cover = data.get("coverImage") or {}
        return cls(
            id=int(data["id"]),
            submission_id=int(data["submissionId"]),
            cover_image={
                locale: CoverImage.from_dict(entry)
                for locale, entry in raw_cover.items()
                if isinstance(entry, dict)
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "submissionId": self.submission_id,
            "coverImage": {
                locale: cover.to_dict() for locale, cover in self.cover_image.items()
            },
        }


@dataclass
class Submission:
    id: int
    context_id: int
    current_publication_id: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Submission:
        return cls(
            id=int(data["id"]),
            context_id=int(data["contextId"]),
            current_publication_id=int(data["currentPublicationId"]),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "id": self.id,
            "contextId": self.context_id,
            "currentPublicationId": self.current_publication_id,
        }


class RecordStore:
    def __init__(self, records_dir: Path) -> None:
        self.records_dir = Path(records_dir)

    def get_submission(self, submission_id: Any, context_id: int) -> Submission | None:
        """Return the submission if it exists and belongs to ``context_id``."""

        key = _coerce_id(submission_id)
        if key is None:
            return None
        data = self._read("submissions", key)
        if data is None:
            return None
        submission = Submission.from_dict(data)
        if submission.context_id != int(context_id):
            return None
        return submission

    def get_publication(self, publication_id: int) -> Publication | None:
        data = self._read("publications", publication_id)
        if data is None:
            return None
        return Publication.from_dict(data)

    def update_publication(self, publication: Publication) -> None:
        self._write("publications", publication.id, publication.to_dict())
        logger.debug("Updated publication %s", publication.id)

    def add_submission(self, submission_id: int, context_id: int) -> Submission:
        """Create a submission together with an empty current publication."""

        publication_id = self._next_id("publications")
        publication = Publication(id=publication_id, submission_id=submission_id)
        submission = Submission(
            id=submission_id,
            context_id=context_id,
            current_publication_id=publication_id,
        )
        self._write("publications", publication.id, publication.to_dict())
        self._write("submissions", submission.id, submission.to_dict())
        return submission

    def _path(self, kind: str, record_id: int) -> Path:
        return self.records_dir / kind / f"{record_id}.json"

    def _read(self, kind: str, record_id: int) -> dict[str, Any] | None:
        path = self._path(kind, record_id)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def _write(self, kind: str, record_id: int, data: dict[str, Any]) -> None:
        path = self._path(kind, record_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")

    def _next_id(self, kind: str) -> int:
        directory = self.records_dir / kind
        if not directory.exists():
            return 1
        ids = [int(path.stem) for path in directory.glob("*.json") if path.stem.isdigit()]
        return max(ids, default=0) + 1


def _coerce_id(raw: Any) -> int | None:
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None
