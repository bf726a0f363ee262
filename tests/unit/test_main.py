"""
Unit tests for the tfs-notify entrypoint.

Tests configuration precedence (CLI over environment over defaults) and
that the step never turns into a failing exit code.
"""

from unittest.mock import patch

import pytest

from tfs_notifier.__main__ import get_build, get_config, main, parse_args

BUILD_ARGS = [
    "--result",
    "SUCCESS",
    "--display-name",
    "app",
    "--number",
    "12",
    "--build-url",
    "https://ci.example.com/job/app/12/",
    "--job-dir",
    "/var/ci/jobs/app",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove notifier environment variables."""
    for name in [
        "TFS_SERVER_URL",
        "TFS_PROJECT_COLLECTION",
        "TFS_PROJECT",
        "TFS_USER_NAME",
        "TFS_USER_PASSWORD",
        "TFS_NATIVE_DIRECTORY",
        "TFS_PROJECT_PATH",
        "TFS_EXCLUDED_REGIONS",
        "TFS_INCLUDED_REGIONS",
        "TFS_CI_LABEL",
        "TFS_BEST_EFFORT",
        "TFS_REQUEST_TIMEOUT",
    ]:
        monkeypatch.delenv(name, raising=False)


class TestGetConfig:
    """Test suite for configuration loading."""

    def test_defaults(self):
        """Test the configuration with nothing set."""
        config = get_config(parse_args(BUILD_ARGS))

        assert config.project_path == ""
        assert config.ci_label == "Jenkins-CI"
        assert config.best_effort is False
        assert config.request_timeout == 30.0

    def test_environment(self, monkeypatch):
        """Test that environment variables are used."""
        monkeypatch.setenv("TFS_SERVER_URL", "https://tfs.example.com/tfs")
        monkeypatch.setenv("TFS_PROJECT_PATH", "$/Project/Main")
        monkeypatch.setenv("TFS_EXCLUDED_REGIONS", ".*\\.txt\n.*\\.md")
        monkeypatch.setenv("TFS_BEST_EFFORT", "true")
        monkeypatch.setenv("TFS_REQUEST_TIMEOUT", "10")

        config = get_config(parse_args(BUILD_ARGS))

        assert config.server_url == "https://tfs.example.com/tfs"
        assert config.project_path == "$/Project/Main"
        assert config.excluded_regions == ".*\\.txt\n.*\\.md"
        assert config.best_effort is True
        assert config.request_timeout == 10.0

    def test_cli_overrides_environment(self, monkeypatch):
        """Test that command-line arguments take precedence."""
        monkeypatch.setenv("TFS_PROJECT_PATH", "$/Env")
        monkeypatch.setenv("TFS_REQUEST_TIMEOUT", "10")

        args = parse_args(
            BUILD_ARGS + ["--project-path", "$/Cli", "--request-timeout", "3", "--best-effort"]
        )
        config = get_config(args)

        assert config.project_path == "$/Cli"
        assert config.request_timeout == 3.0
        assert config.best_effort is True

    @pytest.mark.parametrize("value", ["abc", "0", "-5", "nan", "inf"])
    def test_invalid_timeout_uses_default(self, monkeypatch, value):
        """Test that an invalid timeout falls back to the default."""
        monkeypatch.setenv("TFS_REQUEST_TIMEOUT", value)

        assert get_config(parse_args(BUILD_ARGS)).request_timeout == 30.0

    @pytest.mark.parametrize("value", ["nan", "inf", "0"])
    def test_invalid_cli_timeout_uses_default(self, value):
        """Test that a non-finite or zero --request-timeout falls back to the default."""
        args = parse_args(BUILD_ARGS + ["--request-timeout", value])

        assert get_config(args).request_timeout == 30.0

    def test_cli_disables_best_effort(self, monkeypatch):
        """Test that --no-best-effort overrides TFS_BEST_EFFORT."""
        monkeypatch.setenv("TFS_BEST_EFFORT", "true")

        assert get_config(parse_args(BUILD_ARGS)).best_effort is True
        args = parse_args(BUILD_ARGS + ["--no-best-effort"])
        assert get_config(args).best_effort is False

    def test_password_not_in_repr(self, monkeypatch):
        """Test that the password does not leak into log output."""
        monkeypatch.setenv("TFS_USER_PASSWORD", "hunter2")

        config = get_config(parse_args(BUILD_ARGS))

        assert config.user_password == "hunter2"
        assert "hunter2" not in repr(config)


class TestMain:
    """Test suite for the main function."""

    def test_get_build(self):
        """Test building the build descriptor from arguments."""
        build = get_build(parse_args(BUILD_ARGS))

        assert build.result == "SUCCESS"
        assert build.display_name == "app"
        assert build.number == 12
        assert build.url == "https://ci.example.com/job/app/12/"
        assert build.root_dir == "/var/ci/jobs/app"

    def test_blank_project_path_exits_zero(self, capsys):
        """Test that a run without a project path succeeds."""
        assert main(BUILD_ARGS) == 0
        assert "No project path." in capsys.readouterr().out

    @patch("tfs_notifier.__main__.NotifierStep")
    def test_runs_step(self, mock_step_cls, monkeypatch):
        """Test that main runs the step with the loaded configuration."""
        monkeypatch.setenv("TFS_PROJECT_PATH", "$/Project/Main")

        assert main(BUILD_ARGS) == 0

        config = mock_step_cls.call_args.args[0]
        assert config.project_path == "$/Project/Main"
        build = mock_step_cls.return_value.perform.call_args.args[0]
        assert build.number == 12
