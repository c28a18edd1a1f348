"""Public file store: files served to readers, grouped by context."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..errors import NotFoundError, StoreFailure

logger = logging.getLogger(__name__)


class PublicFileStore:
    def __init__(self, public_dir: Path) -> None:
        self.public_dir = Path(public_dir)

    def context_dir(self, context_id: int) -> Path:
        directory = self.public_dir / "contexts" / str(int(context_id))
        if not directory.is_absolute():
            directory = Path.cwd() / directory
        # resolved so containment checks agree with resolved candidates
        return directory.resolve()

    def copy_context_file(self, context_id: int, source: Path, file_name: str) -> Path:
        """Copy ``source`` into the context directory, replacing any same-named file."""

        target = self.resolve(context_id, file_name)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as exc:
            raise StoreFailure(f"unable to copy {source} to {target}: {exc}") from exc
        return target

    def remove_context_file(self, context_id: int, file_name: str) -> None:
        target = self.resolve(context_id, file_name)
        if not target.is_file():
            raise NotFoundError(f"public file {file_name} not found")
        try:
            target.unlink()
        except OSError as exc:
            raise StoreFailure(f"unable to remove {target}: {exc}") from exc

    def resolve(self, context_id: int, file_name: str) -> Path:
        """Resolve a file name inside the context directory, rejecting escapes."""

        context_dir = self.context_dir(context_id)
        if not file_name:
            raise NotFoundError("empty file name")
        candidate = (context_dir / file_name).resolve()
        try:
            candidate.relative_to(context_dir)
        except ValueError as exc:
            raise NotFoundError(f"{file_name} is outside the public directory") from exc
        return candidate
