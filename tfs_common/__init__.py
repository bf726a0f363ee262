"""
TFS Common module.

This module contains shared domain models, exceptions and interfaces used
across the notifier components (step, persistence, client, admin).

The common module has no dependencies on other tfs_* modules, making it
a pure domain layer that can be imported by any component.
"""

from .exceptions import (
    NotifierError,
    PatternCompileError,
    ServiceConnectionError,
    ServiceError,
    StorageError,
)
from .models import UNKNOWN_CHANGESET, BuildInfo, Notification, NotifierConfig
from .repository import ChangeSetCursorStore
from .service import VersionControlService

__all__ = [
    "UNKNOWN_CHANGESET",
    "BuildInfo",
    "ChangeSetCursorStore",
    "Notification",
    "NotifierConfig",
    "NotifierError",
    "PatternCompileError",
    "ServiceConnectionError",
    "ServiceError",
    "StorageError",
    "VersionControlService",
]
