"""Exceptions raised by the cover image form and its stores."""

from __future__ import annotations


class CoverImageError(Exception):
    """Base class for cover image failures."""


class ValidationError(CoverImageError):
    """Submitted input failed a form rule; carries field -> message key."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        super().__init__(", ".join(f"{k}: {v}" for k, v in self.field_errors.items()))


class PreconditionError(CoverImageError):
    """The caller broke the request contract."""


class UnsupportedMediaError(CoverImageError):
    pass


class StoreFailure(CoverImageError):
    pass


class NotFoundError(CoverImageError):
    pass
