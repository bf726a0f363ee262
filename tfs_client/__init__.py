"""
TFS Client module.

REST implementation of the version-control service used by the
notifier step, talking to Team Foundation Server / Azure DevOps.
"""

from .client import TFSRestService

__all__ = ["TFSRestService"]
