"""
Abstract store interface for the change-set cursor.

This module defines the contract that any cursor store must follow,
allowing the single-path file store to be swapped for a multi-path one
without touching the step.
"""

from abc import ABC, abstractmethod


class ChangeSetCursorStore(ABC):
    """
    Abstract base class for the per-job "last notified change-set" marker.
    """

    @abstractmethod
    def load(self, project_path: str) -> int:
        """
        Get the last notified change-set ID for a project path.

        Args:
            project_path: Watched version-control path

        Returns:
            The stored change-set ID, or UNKNOWN_CHANGESET if there is none

        Raises:
            StorageError: If the store exists but cannot be read
        """
        pass

    @abstractmethod
    def save(self, project_path: str, changeset_id: int) -> None:
        """
        Record the last notified change-set ID for a project path.

        Args:
            project_path: Watched version-control path
            changeset_id: Change-set ID to store

        Raises:
            StorageError: If the store cannot be written
        """
        pass
