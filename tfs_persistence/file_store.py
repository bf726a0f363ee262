"""
Line-oriented file implementation of the change-set cursor store.

The store is a UTF-8 text file in the job directory. Each line has the
form ``<project path>/<change-set ID>``. Project paths contain ``/``
themselves, so a line is split on its last ``/``.

Saving rewrites the whole file with a single line, so a store only ever
remembers the most recently saved project path.
"""

import logging
import re
from pathlib import Path

from tfs_common.exceptions import StorageError
from tfs_common.models import UNKNOWN_CHANGESET
from tfs_common.repository import ChangeSetCursorStore

logger = logging.getLogger(__name__)

CHANGESET_FILE_NAME = "changeSet_Notify.txt"

# ASCII digits only, no surrounding whitespace or digit separators
_CHANGESET_ID = re.compile(r"[+-]?[0-9]+")


def parse_cursor_line(line: str) -> tuple[str, int] | None:
    """
    Parse one store line into (project path, change-set ID).

    Args:
        line: Line without its trailing newline

    Returns:
        Parsed record, or None if the line is malformed
    """
    path, sep, suffix = line.rpartition("/")
    if not sep or not _CHANGESET_ID.fullmatch(suffix):
        return None
    return path, int(suffix)


class FileChangeSetStore(ChangeSetCursorStore):
    """Change-set cursor backed by a single text file."""

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: Location of the store file (need not exist yet)
        """
        self.path = Path(path)

    @classmethod
    def for_job(cls, root_dir: str | Path) -> "FileChangeSetStore":
        """Get the store for a job's root directory."""
        return cls(Path(root_dir) / CHANGESET_FILE_NAME)

    def load(self, project_path: str) -> int:
        if not self.path.exists():
            return UNKNOWN_CHANGESET

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read change-set file {self.path}: {e}") from e

        for line in content.splitlines():
            record = parse_cursor_line(line)
            if record is None:
                logger.debug(f"Skipping malformed change-set line: {line!r}")
                continue
            path, changeset_id = record
            if path == project_path:
                return changeset_id

        return UNKNOWN_CHANGESET

    def save(self, project_path: str, changeset_id: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(f"{project_path}/{changeset_id}\n", encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write change-set file {self.path}: {e}") from e
        logger.debug(f"Saved change-set {changeset_id} for {project_path} to {self.path}")
