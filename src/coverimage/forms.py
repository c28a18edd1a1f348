"""Upload form for a publication's cover image.

One ``UploadImageForm`` serves one request. It reads a submission's
current publication, commits an uploaded temporary file to the public
file store, and records ``{uploadName, altText}`` for the active locale.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from flask import render_template

from cover_common.mime import cover_file_name, image_extension

from .errors import (
    NotFoundError,
    PreconditionError,
    StoreFailure,
    UnsupportedMediaError,
    ValidationError,
)
from .messages import FormResult, translate
from .services.public_files import PublicFileStore
from .services.records import CoverImage, RecordStore
from .services.temporary_files import TemporaryFile, TemporaryFileStore

logger = logging.getLogger(__name__)

WORKFLOW_STAGE_ID_PRODUCTION = 5
TEMPLATE_NAME = "upload_image_form.html"
UPLOAD_FIELD_NAME = "uploadedFile"


@dataclass
class FormData:
    image_alt_text: str = ""
    temporary_file_id: str = ""


@dataclass
class DeleteAction:
    confirm_message: str
    title: str
    params: dict[str, Any]


@dataclass
class DisplayState:
    submission_id: int
    cover_image: CoverImage | None = None
    image_alt_text: str = ""
    delete_action: DeleteAction | None = None
    errors: dict[str, str] = field(default_factory=dict)


class UploadImageForm:
    def __init__(
        self,
        *,
        records: RecordStore,
        public_files: PublicFileStore,
        temporary_files: TemporaryFileStore,
        context_id: int,
        user_id: str,
        locale: str,
        submission_id: Any,
    ) -> None:
        self.records = records
        self.public_files = public_files
        self.temporary_files = temporary_files
        self.context_id = int(context_id)
        self.user_id = str(user_id)
        self.locale = locale
        self.data = FormData()
        self._file_setting_name: str | None = None

        submission = records.get_submission(submission_id, self.context_id)
        if submission is None:
            raise ValidationError({"submissionId": "submission.unknown"})
        publication = records.get_publication(submission.current_publication_id)
        if publication is None:
            raise ValidationError({"submissionId": "submission.unknown"})
        self.submission = submission
        self.submission_id = submission.id
        self.publication = publication

    def get_file_setting_name(self) -> str | None:
        return self._file_setting_name

    def set_file_setting_name(self, file_setting_name: str | None) -> None:
        self._file_setting_name = file_setting_name

    def init_data(self) -> DisplayState:
        """Load the active locale's cover image into the form."""

        cover = self.publication.cover_image_for(self.locale)
        delete_action = None
        if cover:
            delete_action = DeleteAction(
                confirm_message=translate("common.confirmDelete"),
                title=translate("common.delete"),
                params={
                    "coverImage": cover.upload_name,
                    "submissionId": self.submission.id,
                    "stageId": WORKFLOW_STAGE_ID_PRODUCTION,
                },
            )
        self.data.image_alt_text = cover.alt_text if cover else ""
        return DisplayState(
            submission_id=self.submission_id,
            cover_image=cover,
            image_alt_text=self.data.image_alt_text,
            delete_action=delete_action,
        )

    def read_input_data(self, values: Mapping[str, Any]) -> FormData:
        self.data = FormData(
            image_alt_text=str(values.get("imageAltText", "") or ""),
            temporary_file_id=str(values.get("temporaryFileId", "") or "").strip(),
        )
        return self.data

    def validate(self) -> None:
        # Required even when only the alt text changes.
        if not self.data.temporary_file_id:
            raise ValidationError({"temporaryFileId": "manager.website.imageFileRequired"})

    def execute(self) -> FormResult:
        """Commit the uploaded file, or the alt text alone, to the publication."""

        temporary_file = self.fetch_temporary_file()
        existing = self.publication.cover_image_for(self.locale)

        if temporary_file is not None:
            try:
                file_name = self._commit_temporary_file(temporary_file)
            except (UnsupportedMediaError, StoreFailure, NotFoundError) as exc:
                logger.warning(
                    "Cover image upload for submission %s failed: %s",
                    self.submission_id,
                    exc,
                )
                return FormResult.failure("common.uploadFailed")
            logger.info(
                "Stored cover image %s for submission %s", file_name, self.submission_id
            )
            return FormResult.data_changed()

        if existing:
            existing.alt_text = self.data.image_alt_text
            self.records.update_publication(self.publication)
            return FormResult.data_changed()

        return FormResult.failure("common.uploadFailed")

    def delete_cover_image(self, cover_image: str, submission_id: Any) -> FormResult:
        """Clear cover images for every locale, then remove the named file.

        The metadata stays cleared when the file cannot be removed.
        """

        if not cover_image or not str(submission_id or "").strip():
            raise PreconditionError("coverImage and submissionId are required")

        self.publication.clear_cover_image()
        self.records.update_publication(self.publication)

        try:
            self.public_files.remove_context_file(self.submission.context_id, cover_image)
        except (NotFoundError, StoreFailure) as exc:
            logger.warning("Unable to remove cover image %s: %s", cover_image, exc)
            return FormResult.failure("editor.article.removeCoverImageFileNotFound")
        logger.info("Deleted cover image %s", cover_image)
        return FormResult.file_deleted()

    def fetch(self, errors: Mapping[str, str] | None = None) -> str:
        """Render the form; ``errors`` maps field names to message keys."""

        submitted_alt_text = self.data.image_alt_text
        state = self.init_data()
        if errors:
            state.errors = {name: translate(key) for name, key in errors.items()}
            state.image_alt_text = self.data.image_alt_text = submitted_alt_text
        return render_template(
            TEMPLATE_NAME,
            state=state,
            context_id=self.context_id,
            upload_field_name=UPLOAD_FIELD_NAME,
            temporary_file_id=self.data.temporary_file_id,
            file_setting_name=self.get_file_setting_name(),
            file_type="image",
        )

    def fetch_temporary_file(self) -> TemporaryFile | None:
        return self.temporary_files.get(self.data.temporary_file_id, self.user_id)

    def remove_temporary_file(self) -> bool:
        return self.temporary_files.delete_by_id(self.data.temporary_file_id, self.user_id)

    def upload_file(self, file) -> str | None:
        temporary_file = self.temporary_files.handle_upload(file, self.user_id)
        if temporary_file:
            return temporary_file.id
        return None

    def _commit_temporary_file(self, temporary_file: TemporaryFile) -> str:
        extension = image_extension(temporary_file.file_type)
        if not extension:
            raise UnsupportedMediaError(f"{temporary_file.file_type} is not an image type")

        file_name = cover_file_name(self.submission_id, self.locale, extension)
        # No transaction spans the copy and the update; an interruption
        # between them leaves an orphaned public file.
        self.public_files.copy_context_file(
            self.context_id, temporary_file.file_path, file_name
        )
        self.publication.set_cover_image(
            self.locale,
            CoverImage(upload_name=file_name, alt_text=self.data.image_alt_text),
        )
        self.records.update_publication(self.publication)
        self.remove_temporary_file()
        return file_name
