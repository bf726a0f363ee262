"""
TFS Notifier module.

This module contains the post-build step that detects new change-sets
under a watched path and notifies their linked work items, together with
the region pattern compilation and the notification dispatcher it uses.
"""

from .dispatcher import NotificationDispatcher, build_notification, result_color
from .patterns import compile_patterns, normalize_patterns
from .step import NotifierStep

__all__ = [
    "NotificationDispatcher",
    "NotifierStep",
    "build_notification",
    "compile_patterns",
    "normalize_patterns",
    "result_color",
]
