"""Per-user storage for uploads that are not yet attached to a record."""

from __future__ import annotations

import json
import logging
import secrets
from dataclasses import asdict, dataclass
from pathlib import Path

from cover_common.mime import sniff_image_type

logger = logging.getLogger(__name__)


@dataclass
class TemporaryFile:
    id: str
    user_id: str
    file_type: str
    file_path: Path
    original_file_name: str = ""


class TemporaryFileStore:
    """Keeps ``<id>.json`` metadata beside ``<id>.data<suffix>`` data files."""

    def __init__(self, temporary_dir: Path, *, sniff_uploads: bool = True) -> None:
        self.temporary_dir = Path(temporary_dir)
        self.sniff_uploads = sniff_uploads

    def handle_upload(self, file, user_id: str) -> TemporaryFile | None:
        """Save an uploaded werkzeug ``FileStorage``; ``None`` if nothing was sent."""

        if not file or not file.filename:
            return None

        self.temporary_dir.mkdir(parents=True, exist_ok=True)
        file_id = secrets.token_hex(8)
        suffix = Path(file.filename).suffix.lower()
        data_path = self.temporary_dir / f"{file_id}.data{suffix}"
        file.save(data_path)

        file_type = None
        if self.sniff_uploads:
            file_type = sniff_image_type(data_path)
        if not file_type:
            file_type = file.mimetype or "application/octet-stream"

        temporary_file = TemporaryFile(
            id=file_id,
            user_id=str(user_id),
            file_type=file_type,
            file_path=data_path,
            original_file_name=Path(file.filename).name,
        )
        self._metadata_path(file_id).write_text(
            json.dumps(_to_record(temporary_file)), encoding="utf-8"
        )
        logger.info("Stored temporary file %s (%s) for user %s", file_id, file_type, user_id)
        return temporary_file

    def get(self, file_id: str, user_id: str) -> TemporaryFile | None:
        """Return the file only when it exists and belongs to ``user_id``."""

        metadata_path = self._metadata_path(file_id)
        if metadata_path is None or not metadata_path.exists():
            return None
        data = json.loads(metadata_path.read_text(encoding="utf-8"))
        if data.get("user_id") != str(user_id):
            return None
        temporary_file = TemporaryFile(
            id=data["id"],
            user_id=data["user_id"],
            file_type=data["file_type"],
            file_path=Path(data["file_path"]),
            original_file_name=data.get("original_file_name", ""),
        )
        if not temporary_file.file_path.exists():
            return None
        return temporary_file

    def delete_by_id(self, file_id: str, user_id: str) -> bool:
        temporary_file = self.get(file_id, user_id)
        if temporary_file is None:
            return False
        temporary_file.file_path.unlink(missing_ok=True)
        metadata_path = self._metadata_path(file_id)
        if metadata_path is not None:
            metadata_path.unlink(missing_ok=True)
        return True

    def _metadata_path(self, file_id: str) -> Path | None:
        # ids are hex tokens; anything else cannot name a stored file
        if not file_id or not all(ch in "0123456789abcdef" for ch in file_id):
            return None
        return self.temporary_dir / f"{file_id}.json"


def _to_record(temporary_file: TemporaryFile) -> dict[str, str]:
    record = asdict(temporary_file)
    record["file_path"] = str(temporary_file.file_path)
    return record
