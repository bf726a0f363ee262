"""
Unit tests for tfs_common.models.

Tests the defaults and immutability of the domain models.
"""

import dataclasses

import pytest

from tfs_common.exceptions import (
    NotifierError,
    PatternCompileError,
    ServiceConnectionError,
    ServiceError,
    StorageError,
)
from tfs_common.models import UNKNOWN_CHANGESET, BuildInfo, NotifierConfig


class TestNotifierConfig:
    """Test suite for NotifierConfig class."""

    def test_defaults(self):
        """Test that an empty configuration is unrestricted and fail-fast."""
        config = NotifierConfig()

        assert config.project_path == ""
        assert config.excluded_regions == ""
        assert config.included_regions == ""
        assert config.ci_label == "Jenkins-CI"
        assert config.best_effort is False

    def test_is_immutable(self):
        """Test that the configuration cannot change during a run."""
        config = NotifierConfig(project_path="$/P")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.project_path = "$/Q"

    def test_password_hidden_from_repr(self):
        """Test that the password is not part of the repr."""
        assert "secret" not in repr(NotifierConfig(user_password="secret"))


class TestBuildInfo:
    """Test suite for BuildInfo class."""

    def test_result_may_be_missing(self):
        """Test that a build without a result can be described."""
        build = BuildInfo(
            result=None, display_name="app", number=1, url="u", root_dir="/tmp"
        )
        assert build.result is None


class TestExceptions:
    """Test suite for the exception hierarchy."""

    def test_sentinel(self):
        """Test the unknown change-set sentinel."""
        assert UNKNOWN_CHANGESET == -1

    @pytest.mark.parametrize(
        "exc_type", [PatternCompileError, StorageError, ServiceError, ServiceConnectionError]
    )
    def test_all_are_notifier_errors(self, exc_type):
        """Test that every error derives from NotifierError."""
        assert issubclass(exc_type, NotifierError)

    def test_connection_error_is_service_error(self):
        """Test that connection errors are caught as service errors."""
        error = ServiceConnectionError("denied", status_code=401)

        assert isinstance(error, ServiceError)
        assert error.status_code == 401
