"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import os

import click

from ..sync import SyncReport


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _cwd(ctx) -> str:
    """Working directory commands run against (``--cwd`` or the process cwd)."""
    return ctx.obj.get("cwd") or os.getcwd()


def _force_option(f):
    """Shared --force/-f flag for destructive commands."""
    return click.option(
        "-f", "--force", is_flag=True, default=False,
        help="Do not ask for confirmation.",
    )(f)


def _print_config_warnings(config):
    for w in config.warnings:
        click.echo(f"WARNING: {w}", err=True)


def _print_sync_report(ctx, report: SyncReport):
    """Render a SyncReport: results on stdout, problems on stderr."""
    for p in report.copied:
        click.echo(f"  Copied: {p}")
    for p in report.linked:
        click.echo(f"  Linked: {p}")
    for p in report.skipped:
        _status(ctx, f"  Skipped {p} (already exists)")
    for p in report.covered:
        _status(ctx, f"  Skipping {p} (already ignored by git)")
    for p in report.ignored:
        click.echo(f"  Added to .gitignore: {p}")
    for w in report.warnings:
        click.echo(f"WARNING: {w.path}: {w.error}", err=True)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.option("-C", "--cwd", type=click.Path(exists=True, file_okay=False),
              default=None, envvar="SWT_CWD",
              help="Run as if started in this directory.")
@click.version_option(package_name="simple-worktree")
@click.pass_context
def main(ctx, verbose, cwd):
    """swt — simple git worktree management.

    Create worktrees next to your repository and carry untracked local
    files (.env, IDE settings, credentials) into each new one.

    \b
    Quick start:
      swt init                 Write a swtconfig.toml
      swt create my-feature    New worktree + branch, files synced
      swt list                 Show all worktrees
      swt cd my-feature        Print a worktree's path
      swt delete               Remove the current worktree

    \b
    Files to propagate are listed in swtconfig.toml with gitignore syntax:
      filesToSync   symlinked into new worktrees
      filesToCopy   copied into new worktrees
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["cwd"] = cwd
