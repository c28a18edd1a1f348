from __future__ import annotations

import json

from coverimage.services.records import CoverImage, RecordStore


def test_add_submission_creates_current_publication(tmp_path):
    store = RecordStore(tmp_path)

    submission = store.add_submission(42, context_id=1)
    publication = store.get_publication(submission.current_publication_id)

    assert store.get_submission(42, 1) == submission
    assert publication is not None
    assert publication.submission_id == 42
    assert publication.cover_image == {}


def test_get_submission_is_scoped_to_context(tmp_path):
    store = RecordStore(tmp_path)
    store.add_submission(42, context_id=1)

    assert store.get_submission(42, 2) is None
    assert store.get_submission("42", 1) is not None


def test_get_submission_ignores_malformed_ids(tmp_path):
    store = RecordStore(tmp_path)
    store.add_submission(42, context_id=1)

    assert store.get_submission("", 1) is None
    assert store.get_submission("../42", 1) is None
    assert store.get_submission(None, 1) is None


def test_update_publication_persists_cover_image_by_locale(tmp_path):
    store = RecordStore(tmp_path)
    submission = store.add_submission(42, context_id=1)
    publication = store.get_publication(submission.current_publication_id)

    publication.set_cover_image("en", CoverImage("article_42_cover_en.png", "A harbour"))
    store.update_publication(publication)

    raw = json.loads(
        (tmp_path / "publications" / f"{publication.id}.json").read_text(encoding="utf-8")
    )
    assert raw["coverImage"] == {
        "en": {"uploadName": "article_42_cover_en.png", "altText": "A harbour"}
    }
    reloaded = store.get_publication(publication.id)
    assert reloaded.cover_image_for("en") == CoverImage(
        "article_42_cover_en.png", "A harbour"
    )
    assert reloaded.cover_image_for("fr") is None


def test_publication_ids_increment(tmp_path):
    store = RecordStore(tmp_path)

    first = store.add_submission(1, context_id=1)
    second = store.add_submission(2, context_id=1)

    assert second.current_publication_id == first.current_publication_id + 1
