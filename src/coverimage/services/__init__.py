"""Storage backends used by the cover image form."""

from .public_files import PublicFileStore
from .records import CoverImage, Publication, RecordStore, Submission
from .temporary_files import TemporaryFile, TemporaryFileStore

__all__ = [
    "CoverImage",
    "Publication",
    "PublicFileStore",
    "RecordStore",
    "Submission",
    "TemporaryFile",
    "TemporaryFileStore",
]
