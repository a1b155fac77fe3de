"""Worktree commands: create, list, cd, home, delete, delete-all."""

from __future__ import annotations

import click

from .. import git
from ..config import load_config
from ..exceptions import WorktreeError, WorktreeNotFoundError
from ..worktree import (
    create_worktree,
    delete_all_worktrees,
    delete_worktree,
    find_worktree,
    home_path,
    linked_worktrees,
)
from ._helpers import (
    main,
    _cwd,
    _force_option,
    _print_config_warnings,
    _print_sync_report,
    _status,
)


@main.command()
@click.argument("name")
@click.option("-b", "--branch", default=None,
              help="Branch to check out (default: NAME; created if missing).")
@click.option("-p", "--path", "path", type=click.Path(), default=None,
              help="Create the worktree here instead of defaultWorktreeDir/NAME.")
@click.pass_context
def create(ctx, name, branch, path):
    """Create worktree NAME and sync configured files into it."""
    cwd = _cwd(ctx)
    config = load_config(cwd)
    _print_config_warnings(config)
    try:
        result = create_worktree(name, branch=branch, path=path,
                                 config=config, cwd=cwd)
    except WorktreeError as exc:
        raise click.ClickException(str(exc))

    click.echo("Worktree created")
    click.echo(f"  Branch: {result.branch}"
               + (" (new)" if result.created_branch else ""))
    if result.report is not None:
        _status(ctx, "Syncing files from configuration...")
        _print_sync_report(ctx, result.report)
    # Shell wrappers look for this line to cd into the new worktree.
    click.echo(f"Location: {result.path}")


main.add_command(create, name="c")


@main.command("list")
@click.pass_context
def list_cmd(ctx):
    """List worktrees. The current one is marked with an arrow."""
    cwd = _cwd(ctx)
    try:
        git.require_git_repo(cwd)
        worktrees = git.list_worktrees(cwd)
        current = git.git_root(cwd).resolve()
    except WorktreeError as exc:
        raise click.ClickException(str(exc))
    if not worktrees:
        click.echo("No worktrees found")
        return

    width = max(len(wt.name) for wt in worktrees) + 2
    for index, wt in enumerate(worktrees):
        prefix = "→ " if wt.path.resolve() == current else "  "
        suffix = " (main)" if index == 0 else ""
        click.echo(f"{prefix}{wt.name.ljust(width)}: {wt.path}{suffix}")


main.add_command(list_cmd, name="ls")


@main.command()
@click.argument("name")
@click.pass_context
def cd(ctx, name):
    """Print the path of worktree NAME (matched by directory or branch).

    Only the path goes to stdout, so a shell function can cd into it.
    """
    try:
        wt = find_worktree(name, cwd=_cwd(ctx))
    except WorktreeNotFoundError as exc:
        click.echo(f"Worktree '{exc.name}' not found", err=True)
        if exc.available:
            click.echo("\nAvailable worktrees:", err=True)
            for other in exc.available:
                click.echo(f"  {other.name} ({other.branch or 'detached'})", err=True)
        ctx.exit(1)
    except WorktreeError as exc:
        raise click.ClickException(str(exc))
    click.echo(str(wt.path))


@main.command()
@click.pass_context
def home(ctx):
    """Print the path of the main worktree."""
    try:
        path = home_path(cwd=_cwd(ctx))
    except WorktreeError as exc:
        raise click.ClickException(str(exc))
    click.echo(str(path))


@main.command()
@_force_option
@click.pass_context
def delete(ctx, force):
    """Delete the worktree containing the current directory."""
    cwd = _cwd(ctx)
    if not git.is_worktree(cwd):
        raise click.ClickException(
            "Current directory is not a git worktree. "
            "This command should only be run from within a worktree."
        )
    _status(ctx, f"Current: {git.git_root(cwd)}")
    _status(ctx, f"Main repo: {git.main_worktree_path(cwd)}")
    if not force and not click.confirm(
            "Are you sure you want to delete this worktree?", default=False):
        click.echo("Deletion cancelled")
        return

    try:
        result = delete_worktree(cwd)
    except WorktreeError as exc:
        raise click.ClickException(str(exc))
    click.echo("Worktree deleted")
    click.echo("\nNote: you need to change directory manually:")
    click.echo(f"  cd {result.main_repo}")


main.add_command(delete, name="d")


@main.command("delete-all")
@_force_option
@click.pass_context
def delete_all(ctx, force):
    """Delete every worktree except the main repository."""
    cwd = _cwd(ctx)
    try:
        worktrees = linked_worktrees(cwd)
    except WorktreeError as exc:
        raise click.ClickException(str(exc))
    if not worktrees:
        click.echo("No worktrees to delete (only the main repository exists).")
        return

    click.echo(f"Found {len(worktrees)} worktree(s) to delete "
               "(excluding main repository):")
    for wt in worktrees:
        click.echo(f"  - {wt.name} ({wt.branch or 'detached'}) at {wt.path}")
    if not force and not click.confirm("\nDelete all worktrees?", default=False):
        click.echo("Deletion cancelled.")
        return

    try:
        result = delete_all_worktrees(cwd, worktrees=worktrees)
    except WorktreeError as exc:
        raise click.ClickException(str(exc))

    for wt in result.deleted:
        _status(ctx, f"Removed directory {wt.name}")
    for wt, msg in result.failed:
        click.echo(f"ERROR: Failed to delete {wt.name}: {msg}", err=True)
    if result.prune_error:
        click.echo(f"WARNING: Failed to prune worktrees: {result.prune_error}", err=True)
    click.echo(f"Successfully deleted: {len(result.deleted)}")
    if result.failed:
        click.echo(f"Failed: {len(result.failed)}")
        ctx.exit(1)
