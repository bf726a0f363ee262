"""
In-memory implementation of the change-set cursor store.

Unlike the file store, this keeps one record per project path, so
several watched paths can share it without overwriting each other.
"""

from tfs_common.models import UNKNOWN_CHANGESET
from tfs_common.repository import ChangeSetCursorStore


class MemoryChangeSetStore(ChangeSetCursorStore):
    """Change-set cursor backed by a dict keyed by project path."""

    def __init__(self, records: dict[str, int] | None = None):
        self.records: dict[str, int] = dict(records or {})

    def load(self, project_path: str) -> int:
        return self.records.get(project_path, UNKNOWN_CHANGESET)

    def save(self, project_path: str, changeset_id: int) -> None:
        self.records[project_path] = changeset_id
