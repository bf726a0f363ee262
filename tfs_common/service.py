"""
Abstract interface for the version-control / work-item service.

The notifier delegates change-set enumeration, work-item linkage and
posting to work items to an implementation of this contract.
"""

import re
from abc import ABC, abstractmethod

PatternSet = tuple[re.Pattern[str], ...] | None


class VersionControlService(ABC):
    """
    Contract for the version-control backend.

    Implementations are constructed with connection settings and must be
    connected (``connect``) before any query.
    """

    @abstractmethod
    def connect(self) -> None:
        """
        Establish and verify the connection to the server.

        Raises:
            ServiceConnectionError: If the server is unreachable or rejects
                the credentials
        """
        pass

    @abstractmethod
    def get_changeset_id(
        self, project_path: str, excluded: PatternSet, included: PatternSet
    ) -> int:
        """
        Get the highest change-set ID under a path that touches relevant files.

        A changed file is relevant when no excluded pattern matches it and
        either the included set is unrestricted (None) or an included
        pattern matches it.

        Args:
            project_path: Version-control path to search under
            excluded: Compiled exclusion patterns, None for "nothing excluded"
            included: Compiled inclusion patterns, None for "everything included"

        Returns:
            Highest qualifying change-set ID, or UNKNOWN_CHANGESET if none

        Raises:
            ServiceError: If the query fails
        """
        pass

    @abstractmethod
    def get_work_item_ids(self, changeset_id: int) -> list[int]:
        """
        Get the work items associated with a change-set.

        Args:
            changeset_id: Change-set ID

        Returns:
            Work item IDs in the order returned by the server

        Raises:
            ServiceError: If the query fails
        """
        pass

    @abstractmethod
    def add_hyperlink(
        self, work_item_id: int, url: str, comment: str, history: str
    ) -> None:
        """
        Attach a hyperlink and a history entry to a work item.

        Args:
            work_item_id: Work item to update
            url: Hyperlink target (the build URL)
            comment: Plain-text comment for the hyperlink
            history: Rich (HTML) message for the work item history

        Raises:
            ServiceError: If the update fails
        """
        pass
