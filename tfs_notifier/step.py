"""
Post-build step that notifies work items about a completed build.

Each run compares the newest relevant change-set under the watched path
with the change-set recorded by the previous run. When it has advanced,
every work item linked to the new change-set gets a build-status
notification and the new change-set is recorded.

The step never fails the build: errors are reported to the build log
and the run still completes.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from tfs_client.client import TFSRestService
from tfs_common.models import BuildInfo, NotifierConfig
from tfs_common.repository import ChangeSetCursorStore
from tfs_common.service import VersionControlService
from tfs_persistence.file_store import FileChangeSetStore

from .dispatcher import NotificationDispatcher
from .patterns import compile_patterns

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[NotifierConfig], VersionControlService]
StoreFactory = Callable[[str | Path], ChangeSetCursorStore]


def connect_service(config: NotifierConfig) -> VersionControlService:
    """Create and connect the REST service for a configuration."""
    service = TFSRestService.from_config(config)
    service.connect()
    return service


class NotifierStep:
    """
    Runs the change-set notification for one build.

    The service and the cursor store are created per run through the
    injected factories, so tests and alternative backends can replace them.
    """

    def __init__(
        self,
        config: NotifierConfig,
        service_factory: ServiceFactory | None = None,
        store_factory: StoreFactory | None = None,
    ):
        """
        Initialize the step.

        Args:
            config: Notifier configuration
            service_factory: Creates a connected service from the configuration
            store_factory: Creates the cursor store for a job root directory
        """
        self.config = config
        self.service_factory = service_factory or connect_service
        self.store_factory = store_factory or FileChangeSetStore.for_job

    def perform(self, build: BuildInfo, stream: TextIO) -> bool:
        """
        Run the step for a completed build.

        Args:
            build: The completed build
            stream: Build log

        Returns:
            Always True, the step does not block the build
        """
        project_path = self.config.project_path
        if not project_path or not project_path.strip():
            print("No project path.", file=stream)
            return True

        try:
            self._notify(build, project_path, stream)
        except Exception as e:
            print(str(e), file=stream)
            logger.error(
                f"Notification for {build.display_name} #{build.number} failed: {e}",
                exc_info=True,
            )
        return True

    def _notify(self, build: BuildInfo, project_path: str, stream: TextIO) -> None:
        store = self.store_factory(build.root_dir)
        changeset_id = store.load(project_path)

        excluded = compile_patterns(self.config.excluded_regions)
        included = compile_patterns(self.config.included_regions)
        service = self.service_factory(self.config)

        current_changeset_id = service.get_changeset_id(
            project_path, excluded, included
        )

        if changeset_id >= current_changeset_id:
            print(f"ChangeSet: {current_changeset_id}", file=stream)
            logger.info(f"No new change-set for {project_path}")
            return

        if changeset_id < 0:
            print(f"ChangeSet: {current_changeset_id}", file=stream)
        else:
            print(f"ChangeSet: {changeset_id} -> {current_changeset_id}", file=stream)

        work_item_ids = service.get_work_item_ids(current_changeset_id)
        if work_item_ids:
            dispatcher = NotificationDispatcher(
                service,
                ci_label=self.config.ci_label,
                best_effort=self.config.best_effort,
            )
            dispatcher.dispatch(build, work_item_ids, stream)

        store.save(project_path, current_changeset_id)
        logger.info(
            f"Change-set for {project_path} advanced to {current_changeset_id}"
        )
