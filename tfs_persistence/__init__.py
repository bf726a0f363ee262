"""
TFS Persistence module.

This module contains the change-set cursor store implementations.
The file store keeps the job's cursor on disk next to the job; the
memory store keeps one record per project path and can be injected
where several paths share a store.
"""

from .file_store import CHANGESET_FILE_NAME, FileChangeSetStore
from .memory_store import MemoryChangeSetStore

__all__ = ["CHANGESET_FILE_NAME", "FileChangeSetStore", "MemoryChangeSetStore"]
