"""
Standalone entrypoint for running the notifier as a post-build step.

The build host calls this once per completed build, passing the build
descriptor on the command line. Connection settings and regions come
from the command line or from the environment.

Usage:
    python -m tfs_notifier --result SUCCESS --display-name app --number 12 \\
        --build-url https://ci.example.com/job/app/12/ --job-dir /var/ci/jobs/app
    tfs-notify [OPTIONS]  (after pip install)

Environment Variables:
    TFS_SERVER_URL: Server URL
    TFS_PROJECT_COLLECTION: Project collection name
    TFS_PROJECT: Team project name
    TFS_USER_NAME: User name
    TFS_USER_PASSWORD: Password or personal access token
    TFS_NATIVE_DIRECTORY: Native client directory (unused by the REST client)
    TFS_PROJECT_PATH: Watched version-control path
    TFS_EXCLUDED_REGIONS: Excluded regions, one regular expression per line
    TFS_INCLUDED_REGIONS: Included regions, one regular expression per line
    TFS_CI_LABEL: Label prefixed to notifications (default: Jenkins-CI)
    TFS_BEST_EFFORT: Continue after a failed work item notification (default: false)
    TFS_REQUEST_TIMEOUT: Seconds per request (default: 30)
"""

import argparse
import logging
import math
import os
import sys

from tfs_common.models import BuildInfo, NotifierConfig
from tfs_notifier.step import NotifierStep

logger = logging.getLogger(__name__)

# (argument dest, environment variable)
CONFIG_ENV_VARS = [
    ("server_url", "TFS_SERVER_URL"),
    ("project_collection", "TFS_PROJECT_COLLECTION"),
    ("project", "TFS_PROJECT"),
    ("user_name", "TFS_USER_NAME"),
    ("user_password", "TFS_USER_PASSWORD"),
    ("native_directory", "TFS_NATIVE_DIRECTORY"),
    ("project_path", "TFS_PROJECT_PATH"),
    ("excluded_regions", "TFS_EXCLUDED_REGIONS"),
    ("included_regions", "TFS_INCLUDED_REGIONS"),
    ("ci_label", "TFS_CI_LABEL"),
]

DEFAULT_REQUEST_TIMEOUT = 30.0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments to parse (default: sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="TFS Notifier - notify work items of new change-sets after a build",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  TFS_SERVER_URL, TFS_PROJECT_COLLECTION, TFS_PROJECT, TFS_USER_NAME,
  TFS_USER_PASSWORD, TFS_NATIVE_DIRECTORY, TFS_PROJECT_PATH,
  TFS_EXCLUDED_REGIONS, TFS_INCLUDED_REGIONS, TFS_CI_LABEL,
  TFS_BEST_EFFORT, TFS_REQUEST_TIMEOUT

Note: Command-line arguments override environment variables.

Examples:
  # Notify after a successful build
  tfs-notify --result SUCCESS --display-name app --number 12 \\
      --build-url https://ci.example.com/job/app/12/ --job-dir /var/ci/jobs/app \\
      --server-url https://tfs.example.com/tfs --project-collection DefaultCollection \\
      --project-path '$/App/Main'

  # Keep notifying the remaining work items when one fails
  tfs-notify ... --best-effort

  # Stop at the first failed work item even if TFS_BEST_EFFORT is set
  tfs-notify ... --no-best-effort
        """,
    )

    build = parser.add_argument_group("build")
    build.add_argument("--result", default=None, help="Build result (SUCCESS, UNSTABLE, FAILURE, ...)")
    build.add_argument("--display-name", required=True, help="Job display name")
    build.add_argument("--number", type=int, required=True, help="Build number")
    build.add_argument("--build-url", required=True, help="Absolute URL of the build")
    build.add_argument("--job-dir", required=True, help="Job root directory (holds the change-set file)")

    service = parser.add_argument_group("service")
    service.add_argument("--server-url", default=None, help="Server URL (default: TFS_SERVER_URL env)")
    service.add_argument("--project-collection", default=None, help="Project collection (default: TFS_PROJECT_COLLECTION env)")
    service.add_argument("--project", default=None, help="Team project (default: TFS_PROJECT env)")
    service.add_argument("--user-name", default=None, help="User name (default: TFS_USER_NAME env)")
    service.add_argument("--user-password", default=None, help="Password or token (default: TFS_USER_PASSWORD env)")
    service.add_argument("--native-directory", default=None, help="Native client directory (default: TFS_NATIVE_DIRECTORY env)")
    service.add_argument("--project-path", default=None, help="Watched version-control path (default: TFS_PROJECT_PATH env)")
    service.add_argument("--excluded-regions", default=None, help="Excluded regions, one per line (default: TFS_EXCLUDED_REGIONS env)")
    service.add_argument("--included-regions", default=None, help="Included regions, one per line (default: TFS_INCLUDED_REGIONS env)")
    service.add_argument("--ci-label", default=None, help="Notification prefix (default: TFS_CI_LABEL env or Jenkins-CI)")
    service.add_argument(
        "--best-effort",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Continue after a failed work item notification (default: TFS_BEST_EFFORT env or false)",
    )
    service.add_argument("--request-timeout", type=float, default=None, help="Seconds per request (default: TFS_REQUEST_TIMEOUT env or 30)")

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def get_best_effort(args: argparse.Namespace) -> bool:
    """
    Get the dispatch policy from CLI args or environment.

    Args:
        args: Parsed command-line arguments

    Returns:
        True to continue past failed work item notifications
    """
    if args.best_effort is not None:
        return args.best_effort
    return os.environ.get("TFS_BEST_EFFORT", "").strip().lower() in ("1", "true", "yes")


def is_valid_timeout(timeout: float) -> bool:
    """Check that a timeout is a positive finite number of seconds."""
    return math.isfinite(timeout) and timeout > 0


def get_request_timeout(args: argparse.Namespace) -> float:
    """
    Get the request timeout from CLI args or environment.

    Args:
        args: Parsed command-line arguments

    Returns:
        Seconds per request
    """
    if args.request_timeout is not None:
        if not is_valid_timeout(args.request_timeout):
            logger.warning(
                f"Invalid request timeout={args.request_timeout}, "
                f"using default {DEFAULT_REQUEST_TIMEOUT}"
            )
            return DEFAULT_REQUEST_TIMEOUT
        return args.request_timeout

    try:
        timeout = float(os.environ.get("TFS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))
        if not is_valid_timeout(timeout):
            logger.warning(
                f"Invalid TFS_REQUEST_TIMEOUT={timeout}, using default {DEFAULT_REQUEST_TIMEOUT}"
            )
            return DEFAULT_REQUEST_TIMEOUT
        return timeout
    except ValueError:
        logger.warning(
            f"Invalid TFS_REQUEST_TIMEOUT={os.environ.get('TFS_REQUEST_TIMEOUT')}, "
            f"using default {DEFAULT_REQUEST_TIMEOUT}"
        )
        return DEFAULT_REQUEST_TIMEOUT


def get_config(args: argparse.Namespace) -> NotifierConfig:
    """
    Build the notifier configuration from CLI args and environment.

    Args:
        args: Parsed command-line arguments

    Returns:
        Notifier configuration
    """
    values: dict[str, str] = {}
    for dest, env_var in CONFIG_ENV_VARS:
        value = getattr(args, dest)
        if value is None:
            value = os.environ.get(env_var)
        if value is not None:
            values[dest] = value

    return NotifierConfig(
        **values,
        best_effort=get_best_effort(args),
        request_timeout=get_request_timeout(args),
    )


def get_build(args: argparse.Namespace) -> BuildInfo:
    """Build the build descriptor from CLI args."""
    return BuildInfo(
        result=args.result,
        display_name=args.display_name,
        number=args.number,
        url=args.build_url,
        root_dir=args.job_dir,
    )


def main(argv: list[str] | None = None) -> int:
    """
    Main entrypoint for the notifier step.

    Returns:
        Exit code, always 0 once the step ran
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = get_config(args)
    logger.debug(f"Running notifier with {config}")

    step = NotifierStep(config)
    step.perform(get_build(args), sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
