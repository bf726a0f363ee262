"""
Build-status notifications for work items.

For every work item linked to the newest change-set, a plain comment and
an HTML history entry describing the build are posted through the
version-control service.
"""

import logging
from typing import TextIO

from tfs_common.exceptions import ServiceError
from tfs_common.models import (
    RESULT_FAILURE,
    RESULT_SUCCESS,
    RESULT_UNSTABLE,
    BuildInfo,
    Notification,
)
from tfs_common.service import VersionControlService

logger = logging.getLogger(__name__)

RESULT_COLORS = {
    RESULT_SUCCESS: "blue",
    RESULT_UNSTABLE: "orange",
    RESULT_FAILURE: "red",
}


def result_color(result: str | None) -> str:
    """Get the display color for a build result."""
    return RESULT_COLORS.get(result, "black")


def build_notification(
    build: BuildInfo, work_item_id: int, ci_label: str = "Jenkins-CI"
) -> Notification:
    """
    Compose the notification for one work item.

    Args:
        build: The completed build
        work_item_id: Work item to notify
        ci_label: Prefix naming the CI system

    Returns:
        Notification with comment and history message
    """
    color = result_color(build.result)
    # An absent result is rendered as "null"
    result = build.result if build.result is not None else "null"

    comment = f"{ci_label} {build.display_name} #{build.number} {result}"
    history = (
        f'{ci_label} {build.display_name} <a href="{build.url}">#{build.number}</a> '
        f'<font style="color:{color}; font-weight: bold;">{result}</font>'
    )
    return Notification(
        work_item_id=work_item_id,
        url=build.url,
        comment=comment,
        history=history,
        color=color,
    )


class NotificationDispatcher:
    """Sends one build notification per work item."""

    def __init__(
        self,
        service: VersionControlService,
        ci_label: str = "Jenkins-CI",
        best_effort: bool = False,
    ):
        """
        Initialize the dispatcher.

        Args:
            service: Connected version-control service
            ci_label: Prefix naming the CI system in messages
            best_effort: If True, a failed work item is logged and skipped.
                Otherwise the first failure aborts the remaining items.
        """
        self.service = service
        self.ci_label = ci_label
        self.best_effort = best_effort

    def dispatch(
        self, build: BuildInfo, work_item_ids: list[int], stream: TextIO
    ) -> int:
        """
        Notify each work item, in the order given.

        Args:
            build: The completed build
            work_item_ids: Work items linked to the change-set
            stream: Build log

        Returns:
            Number of notifications sent
        """
        sent = 0
        for work_item_id in work_item_ids:
            print(f"WorkItem: {work_item_id}", file=stream)
            notification = build_notification(build, work_item_id, self.ci_label)
            try:
                self.service.add_hyperlink(
                    notification.work_item_id,
                    notification.url,
                    notification.comment,
                    notification.history,
                )
            except ServiceError as e:
                if not self.best_effort:
                    raise
                print(f"WorkItem {work_item_id} not notified: {e}", file=stream)
                logger.warning(f"Failed to notify work item {work_item_id}: {e}")
                continue
            sent += 1

        logger.info(f"Sent {sent}/{len(work_item_ids)} work item notifications")
        return sent
