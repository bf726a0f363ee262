"""
Admin CLI for the build notifier.

Provides commands to inspect and reset a job's change-set cursor and to
try region patterns against server paths.
"""

import sys

import click

from tfs_client.client import is_path_included
from tfs_common.exceptions import PatternCompileError, StorageError
from tfs_notifier.patterns import compile_patterns
from tfs_persistence.file_store import FileChangeSetStore, parse_cursor_line


def get_store(job_dir: str) -> FileChangeSetStore:
    """Get the change-set store of a job directory."""
    return FileChangeSetStore.for_job(job_dir)


@click.group()
def cli():
    """TFS Admin - Manage change-set cursors and region patterns."""
    pass


@cli.group()
def cursor():
    """Manage change-set cursors."""
    pass


@cli.group()
def patterns():
    """Check region patterns."""
    pass


# ============================================================================
# Cursor Commands
# ============================================================================


@cursor.command("show")
@click.option("--job-dir", required=True, type=click.Path(file_okay=False), help="Job root directory")
@click.option("--project-path", help="Only show the cursor for this project path")
def cursor_show(job_dir: str, project_path: str | None):
    """Show the recorded change-set cursor."""
    store = get_store(job_dir)

    if project_path:
        try:
            changeset_id = store.load(project_path)
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        if changeset_id < 0:
            click.echo(f"No change-set recorded for {project_path}")
        else:
            click.echo(f"{project_path}: {changeset_id}")
        return

    if not store.path.exists():
        click.echo("No change-set file found.")
        return

    try:
        lines = store.path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: Cannot read {store.path}: {e}", err=True)
        sys.exit(1)

    click.echo(f"\n{'Project Path':<50} {'ChangeSet':<10}")
    click.echo("-" * 61)
    for line in lines:
        record = parse_cursor_line(line)
        if record is None:
            click.echo(f"{line:<50} {'(invalid)':<10}")
            continue
        path, changeset_id = record
        click.echo(f"{path:<50} {changeset_id:<10}")
    click.echo()


@cursor.command("set")
@click.argument("project_path")
@click.argument("changeset_id", type=click.IntRange(min=0))
@click.option("--job-dir", required=True, type=click.Path(file_okay=False), help="Job root directory")
def cursor_set(project_path: str, changeset_id: int, job_dir: str):
    """Record CHANGESET_ID as the last notified change-set of PROJECT_PATH."""
    store = get_store(job_dir)
    try:
        store.save(project_path, changeset_id)
    except StorageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo("✓ Change-set recorded")
    click.echo(f"  Path:      {project_path}")
    click.echo(f"  ChangeSet: {changeset_id}")
    click.echo(f"  File:      {store.path}")


# ============================================================================
# Pattern Commands
# ============================================================================


@patterns.command("check")
@click.argument("paths", nargs=-1, required=True)
@click.option("--include", "included_regions", default="", help="Included regions, one per line")
@click.option("--exclude", "excluded_regions", default="", help="Excluded regions, one per line")
def patterns_check(paths: tuple[str, ...], included_regions: str, excluded_regions: str):
    """Show whether each server path in PATHS counts towards a change-set."""
    try:
        excluded = compile_patterns(excluded_regions)
        included = compile_patterns(included_regions)
    except PatternCompileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for path in paths:
        status = "included" if is_path_included(path, excluded, included) else "excluded"
        click.echo(f"{status:<9} {path}")
