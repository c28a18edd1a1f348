"""Message keys and the result payload returned to callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DATA_CHANGED = "dataChanged"
FILE_DELETED = "fileDeleted"

MESSAGES = {
    "common.confirmDelete": "Are you sure you want to delete this item?",
    "common.delete": "Delete",
    "common.uploadFailed": "The upload failed. Please try again.",
    "editor.article.removeCoverImageFileNotFound": (
        "The cover image was removed, but the file could not be found."
    ),
    "manager.website.imageFileRequired": "An image file is required.",
    "submission.noFileSelected": "No file selected.",
    "submission.unknown": "The requested submission does not exist.",
}


def translate(key: str) -> str:
    return MESSAGES.get(key, key)


@dataclass
class FormResult:
    """Outcome of a form operation: dataChanged, fileDeleted or a failure."""

    status: bool
    event: str | None = None
    message_key: str | None = None

    @classmethod
    def data_changed(cls) -> FormResult:
        return cls(True, event=DATA_CHANGED)

    @classmethod
    def file_deleted(cls) -> FormResult:
        return cls(True, event=FILE_DELETED)

    @classmethod
    def failure(cls, message_key: str) -> FormResult:
        return cls(False, message_key=message_key)

    @property
    def content(self) -> str | None:
        return translate(self.message_key) if self.message_key else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status,
            "content": self.content,
            "event": self.event,
        }
        if self.message_key:
            payload["message_key"] = self.message_key
        return payload
