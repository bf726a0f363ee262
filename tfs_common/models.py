"""
Data models for the build notifier.

These models represent the domain objects used throughout the application,
independent of the build host and the version-control backend.
"""

from dataclasses import dataclass, field

# Cursor value meaning "no change-set has been notified yet"
UNKNOWN_CHANGESET = -1

RESULT_SUCCESS = "SUCCESS"
RESULT_UNSTABLE = "UNSTABLE"
RESULT_FAILURE = "FAILURE"


@dataclass(frozen=True)
class BuildInfo:
    """
    Describes the build that just completed.

    This is the narrow view of the build host the notifier consumes.
    """

    result: str | None  # "SUCCESS", "UNSTABLE", "FAILURE", anything else
    display_name: str  # Job display name
    number: int  # Build number
    url: str  # Canonical absolute URL of the build
    root_dir: str  # Job root directory (holds the cursor store)


@dataclass(frozen=True)
class Notification:
    """
    Build-status notification attached to a single work item.

    The comment is plain text; the history message carries a link to the
    build and a colored result label.
    """

    work_item_id: int
    url: str
    comment: str
    history: str
    color: str


@dataclass(frozen=True)
class NotifierConfig:
    """
    Configuration for one notifier step.

    Injected into the step at construction time. The included/excluded
    regions are raw multi-line text, one regular expression per line.
    """

    server_url: str = ""
    project_collection: str = ""
    project: str = ""
    user_name: str = ""
    user_password: str = field(default="", repr=False)
    project_path: str = ""
    native_directory: str = ""
    excluded_regions: str = ""
    included_regions: str = ""
    ci_label: str = "Jenkins-CI"
    best_effort: bool = False  # Continue past per-work-item notification failures
    request_timeout: float = 30.0
