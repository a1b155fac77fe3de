"""The sync and init commands."""

from __future__ import annotations

from pathlib import Path

import click

from .. import git
from ..config import CONFIG_TEMPLATE, init_config, load_config
from ..exceptions import WorktreeError
from ..sync import sync_files
from ._helpers import (
    main,
    _cwd,
    _print_config_warnings,
    _print_sync_report,
    _status,
)


@main.command()
@click.argument("source", required=False, type=click.Path(exists=True, file_okay=False))
@click.argument("target", required=False, type=click.Path(exists=True, file_okay=False))
@click.option("--no-gitignore", "no_gitignore", is_flag=True, default=False,
              help="Do not record synced paths in the target's .gitignore.")
@click.pass_context
def sync(ctx, source, target, no_gitignore):
    """Propagate configured files from SOURCE into TARGET.

    SOURCE defaults to the main worktree and TARGET to the worktree
    containing the current directory, so a post-checkout hook can simply
    run ``swt sync``.  Files already present in TARGET are left alone;
    running it again is safe.
    """
    cwd = _cwd(ctx)
    try:
        if target is None:
            target = git.git_root(cwd)
        if source is None:
            source = git.main_worktree_path(cwd)
            if source is None:
                raise WorktreeError("Could not determine main repository path")
    except WorktreeError as exc:
        raise click.ClickException(str(exc))

    source = Path(source).absolute()
    target = Path(target).absolute()
    if source.resolve() == target.resolve():
        click.echo("Source and target are the same worktree; nothing to sync.")
        return

    # The config lives with the files of record.
    config = load_config(source)
    _print_config_warnings(config)
    if no_gitignore:
        config.add_to_gitignore = False
    if not config.has_patterns:
        _status(ctx, "No filesToSync or filesToCopy patterns configured")
        return

    _status(ctx, f"Syncing {source} -> {target}")
    report = sync_files(source, target, config)
    _print_sync_report(ctx, report)
    if report.in_sync and not report.warnings:
        click.echo("Already in sync")


@main.command()
@click.pass_context
def init(ctx):
    """Write a commented swtconfig.toml in the current directory."""
    try:
        path = init_config(_cwd(ctx))
    except WorktreeError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Created {path}")
    _status(ctx, CONFIG_TEMPLATE)
