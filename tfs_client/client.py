import logging
from collections.abc import Iterator
from typing import Any
from urllib.parse import quote

import requests

from tfs_common.exceptions import ServiceConnectionError, ServiceError
from tfs_common.models import UNKNOWN_CHANGESET, NotifierConfig
from tfs_common.service import PatternSet, VersionControlService

logger = logging.getLogger(__name__)

API_VERSION = "6.0"
JSON_PATCH = "application/json-patch+json"


def is_path_included(path: str, excluded: PatternSet, included: PatternSet) -> bool:
    """
    Decide whether a changed file counts towards a change-set.

    Patterns must match the whole server path, as with SCM region settings
    in build hosts (e.g. ``.*\\.txt`` excludes every text file).

    Args:
        path: Server path of the changed file
        excluded: Exclusion patterns, None for "nothing excluded"
        included: Inclusion patterns, None for "everything included"

    Returns:
        True if no exclusion matches and the path is included
    """
    if excluded and any(p.fullmatch(path) for p in excluded):
        return False
    if included is None:
        return True
    return any(p.fullmatch(path) for p in included)


class TFSRestService(VersionControlService):
    """Version-control service backed by the TFS / Azure DevOps REST API."""

    def __init__(
        self,
        server_url: str,
        project_collection: str = "",
        user_name: str = "",
        user_password: str = "",
        native_directory: str = "",
        timeout: float = 30.0,
        page_size: int = 100,
    ):
        """
        Initialize the service.

        Args:
            server_url: Server URL, e.g. https://tfs.example.com/tfs
            project_collection: Collection (or organization) name
            user_name: User name for basic authentication
            user_password: Password or personal access token
            native_directory: Native client directory, unused by the REST client
            timeout: Seconds before a request is abandoned
            page_size: Change-sets fetched per listing request
        """
        base = server_url.rstrip("/")
        if project_collection:
            base = f"{base}/{quote(project_collection.strip('/'))}"
        self.base_url = base
        self.auth = (user_name, user_password) if user_name or user_password else None
        self.native_directory = native_directory
        self.timeout = timeout
        self.page_size = page_size

    @classmethod
    def from_config(cls, config: NotifierConfig) -> "TFSRestService":
        """Create a service from the notifier configuration."""
        return cls(
            server_url=config.server_url,
            project_collection=config.project_collection,
            user_name=config.user_name,
            user_password=config.user_password,
            native_directory=config.native_directory,
            timeout=config.request_timeout,
        )

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Send a request to the API and return the decoded JSON body.

        Raises:
            ServiceConnectionError: If the server rejects the credentials
            ServiceError: If the request fails or the body is not JSON
        """
        url = f"{self.base_url}/{path}"
        query = {"api-version": API_VERSION, **(params or {})}
        try:
            response = requests.request(
                method,
                url,
                params=query,
                json=json,
                headers=headers,
                auth=self.auth,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ServiceError(f"Error contacting TFS server: {e}") from e

        if response.status_code in (401, 403):
            raise ServiceConnectionError(
                f"TFS server rejected credentials ({response.status_code})",
                status_code=response.status_code,
            )
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise ServiceError(
                f"TFS request failed: {e}", status_code=response.status_code
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise ServiceError(f"Invalid response from TFS server: {e}") from e

    def connect(self) -> None:
        try:
            self._request("GET", "_apis/projects", params={"$top": 1})
        except ServiceConnectionError:
            raise
        except ServiceError as e:
            raise ServiceConnectionError(
                f"Cannot connect to {self.base_url}: {e}", status_code=e.status_code
            ) from e
        logger.info(f"Connected to {self.base_url}")

    def _list_changesets(self, project_path: str, skip: int) -> list[dict[str, Any]]:
        body = self._request(
            "GET",
            "_apis/tfvc/changesets",
            params={
                "searchCriteria.itemPath": project_path,
                "$orderby": "id desc",
                "$top": self.page_size,
                "$skip": skip,
            },
        )
        return body.get("value", [])

    def _changed_paths(self, changeset_id: int) -> Iterator[str]:
        """Yield the server paths changed by a change-set, page by page."""
        skip = 0
        while True:
            body = self._request(
                "GET",
                f"_apis/tfvc/changesets/{changeset_id}/changes",
                params={"$top": self.page_size, "$skip": skip},
            )
            changes = body.get("value", [])
            for change in changes:
                path = change.get("item", {}).get("path")
                if path:
                    yield path
            if len(changes) < self.page_size:
                return
            skip += len(changes)

    def get_changeset_id(
        self, project_path: str, excluded: PatternSet, included: PatternSet
    ) -> int:
        unrestricted = not excluded and included is None
        skip = 0
        while True:
            changesets = self._list_changesets(project_path, skip)
            for changeset in changesets:
                changeset_id = int(changeset["changesetId"])
                if unrestricted:
                    return changeset_id
                paths = self._changed_paths(changeset_id)
                if any(is_path_included(p, excluded, included) for p in paths):
                    return changeset_id
                logger.debug(f"Change-set {changeset_id} touches no included paths")
            if len(changesets) < self.page_size:
                return UNKNOWN_CHANGESET
            skip += len(changesets)

    def get_work_item_ids(self, changeset_id: int) -> list[int]:
        body = self._request("GET", f"_apis/tfvc/changesets/{changeset_id}/workItems")
        return [int(item["id"]) for item in body.get("value", [])]

    def add_hyperlink(
        self, work_item_id: int, url: str, comment: str, history: str
    ) -> None:
        patch = [
            {
                "op": "add",
                "path": "/relations/-",
                "value": {
                    "rel": "Hyperlink",
                    "url": url,
                    "attributes": {"comment": comment},
                },
            },
            {"op": "add", "path": "/fields/System.History", "value": history},
        ]
        self._request(
            "PATCH",
            f"_apis/wit/workitems/{work_item_id}",
            json=patch,
            headers={"Content-Type": JSON_PATCH},
        )
        logger.debug(f"Added hyperlink {url} to work item {work_item_id}")
