"""Flask routes for the cover image form."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request, send_from_directory

from .errors import PreconditionError, ValidationError
from .forms import UPLOAD_FIELD_NAME, UploadImageForm
from .messages import translate

bp = Blueprint("coverimage", __name__)

FILE_SETTING_NAME = "coverImage"


def _active_locale() -> str:
    locales = current_app.config["SUPPORTED_LOCALES"]
    best = request.accept_languages.best_match(locales)
    return best or current_app.config["PRIMARY_LOCALE"]


def _current_user_id() -> str:
    return request.headers.get("X-User-Id", "").strip() or str(
        current_app.config["DEFAULT_USER_ID"]
    )


def _build_form(context_id: int, submission_id) -> UploadImageForm:
    stores = current_app.extensions["coverimage"]
    form = UploadImageForm(
        records=stores["records"],
        public_files=stores["public_files"],
        temporary_files=stores["temporary_files"],
        context_id=context_id,
        user_id=_current_user_id(),
        locale=_active_locale(),
        submission_id=submission_id,
    )
    form.set_file_setting_name(FILE_SETTING_NAME)
    return form


def _unknown_submission(exc: ValidationError):
    messages = {name: translate(key) for name, key in exc.field_errors.items()}
    return jsonify({"error": messages.get("submissionId", str(exc))}), 404


@bp.errorhandler(PreconditionError)
def precondition_failed(exc: PreconditionError):
    return jsonify({"error": str(exc)}), 400


@bp.route("/contexts/<int:context_id>/cover-image", methods=["GET"])
def show_form(context_id: int):
    """Render the upload form for the submission's current publication."""

    try:
        form = _build_form(context_id, request.args.get("submissionId"))
    except ValidationError as exc:
        return _unknown_submission(exc)
    form.read_input_data(request.args)
    return form.fetch()


@bp.route("/contexts/<int:context_id>/cover-image/upload", methods=["POST"])
def upload_image(context_id: int):
    """Store an uploaded file temporarily and hand back its id."""

    try:
        form = _build_form(context_id, request.values.get("submissionId"))
    except ValidationError as exc:
        return _unknown_submission(exc)

    temporary_file_id = form.upload_file(request.files.get(UPLOAD_FIELD_NAME))
    if not temporary_file_id:
        return {"status": False, "content": translate("submission.noFileSelected")}, 400
    return {"status": True, "temporaryFileId": temporary_file_id}


@bp.route("/contexts/<int:context_id>/cover-image", methods=["POST"])
def save_cover_image(context_id: int):
    try:
        form = _build_form(context_id, request.form.get("submissionId"))
    except ValidationError as exc:
        return _unknown_submission(exc)

    form.read_input_data(request.form)
    try:
        form.validate()
    except ValidationError as exc:
        content = form.fetch(errors=exc.field_errors)
        return jsonify({"status": False, "content": content, "event": None}), 400

    result = form.execute()
    return jsonify(result.to_dict())


@bp.route("/contexts/<int:context_id>/cover-image/delete", methods=["POST"])
def delete_cover_image(context_id: int):
    cover_image = request.values.get("coverImage", "")
    submission_id = request.values.get("submissionId", "")
    if not cover_image or not submission_id:
        raise PreconditionError("coverImage and submissionId are required")

    try:
        form = _build_form(context_id, submission_id)
    except ValidationError as exc:
        return _unknown_submission(exc)

    result = form.delete_cover_image(cover_image, submission_id)
    return jsonify(result.to_dict())


@bp.route("/contexts/<int:context_id>/public/<path:filename>")
def public_file(context_id: int, filename: str):
    public_files = current_app.extensions["coverimage"]["public_files"]
    return send_from_directory(str(public_files.context_dir(context_id)), filename)
