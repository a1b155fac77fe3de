"""Create, find, and delete worktrees.

These functions do the work and return result objects; printing and
prompting are left to the CLI.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from . import git
from .config import Config, load_config, resolve_worktree_dir
from .exceptions import GitError, WorktreeError, WorktreeNotFoundError
from .sync import IgnoreOracle, SyncReport, sync_files


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@dataclass
class CreateResult:
    """Outcome of :func:`create_worktree`.

    Attributes:
        path: The new worktree directory.
        branch: Branch checked out in it.
        created_branch: True if the branch was created for this worktree.
        report: File sync report, or ``None`` if no patterns are configured.
    """
    path: Path
    branch: str
    created_branch: bool
    report: SyncReport | None = None


def create_worktree(
    name: str,
    *,
    branch: str | None = None,
    path: str | os.PathLike | None = None,
    config: Config | None = None,
    cwd: str | os.PathLike | None = None,
    oracle: IgnoreOracle | None = None,
) -> CreateResult:
    """Create a worktree called *name* and sync configured files into it.

    The branch defaults to *name*; it is checked out if it exists and
    created otherwise.  If ``git worktree add`` fails, whatever it left
    behind is force-removed before the error is raised.  File sync
    problems never fail creation; they appear on ``result.report``.

    Raises:
        NotAGitRepositoryError: If *cwd* is not inside a repository.
        WorktreeError: If the target directory exists or git fails.
    """
    git.require_git_repo(cwd)
    root = git.git_root(cwd)
    if config is None:
        config = load_config(cwd)
    branch = branch or name
    worktree_path = resolve_worktree_dir(config, name, path, git_root=root)

    if worktree_path.exists():
        raise WorktreeError(f"Directory already exists: {worktree_path}")

    create_branch = not git.branch_exists(branch, cwd=root)
    try:
        git.add_worktree(worktree_path, branch, create_branch=create_branch, cwd=root)
    except GitError as exc:
        if worktree_path.exists():
            try:
                git.remove_worktree(worktree_path, force=True, cwd=root)
            except GitError:
                pass
        raise WorktreeError(f"Failed to create worktree: {exc}") from exc

    result = CreateResult(path=worktree_path, branch=branch,
                          created_branch=create_branch)
    if config.has_patterns:
        result.report = sync_files(root, worktree_path, config, oracle=oracle)
    return result


# ---------------------------------------------------------------------------
# Navigate
# ---------------------------------------------------------------------------

def find_worktree(name: str, cwd: str | os.PathLike | None = None) -> git.WorktreeInfo:
    """Return the worktree whose directory name or branch equals *name*.

    Raises:
        WorktreeNotFoundError: With the available worktrees attached.
    """
    git.require_git_repo(cwd)
    worktrees = git.list_worktrees(cwd)
    for wt in worktrees:
        if wt.name == name or wt.branch == name:
            return wt
    raise WorktreeNotFoundError(name, worktrees)


def home_path(cwd: str | os.PathLike | None = None) -> Path:
    """Path of the main worktree."""
    git.require_git_repo(cwd)
    main = git.main_worktree_path(cwd)
    if main is None:
        raise WorktreeError("Could not determine main repository path")
    return main


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@dataclass
class DeleteResult:
    path: Path
    main_repo: Path


def delete_worktree(cwd: str | os.PathLike | None = None) -> DeleteResult:
    """Remove the linked worktree containing *cwd*.

    Raises:
        WorktreeError: If *cwd* is not in a linked worktree or removal fails.
    """
    if not git.is_worktree(cwd):
        raise WorktreeError(
            "Current directory is not a git worktree. "
            "This command should only be run from within a worktree."
        )
    current = git.git_root(cwd)
    main = git.main_worktree_path(cwd)
    if main is None:
        raise WorktreeError("Could not determine main repository path")
    try:
        git.remove_worktree(current, force=True, cwd=main)
    except GitError as exc:
        raise WorktreeError(f"Failed to delete worktree: {exc}") from exc
    return DeleteResult(path=current, main_repo=main)


@dataclass
class DeleteAllResult:
    """Outcome of :func:`delete_all_worktrees`.

    Attributes:
        deleted: Worktrees whose directory was removed.
        failed: ``(worktree, message)`` for directories that could not be removed.
        prune_error: Message if the final ``git worktree prune`` failed.
    """
    deleted: list[git.WorktreeInfo] = field(default_factory=list)
    failed: list[tuple[git.WorktreeInfo, str]] = field(default_factory=list)
    prune_error: str | None = None


def linked_worktrees(cwd: str | os.PathLike | None = None) -> list[git.WorktreeInfo]:
    """Every worktree except the main one."""
    git.require_git_repo(cwd)
    worktrees = git.list_worktrees(cwd)
    return worktrees[1:]


def delete_all_worktrees(
    cwd: str | os.PathLike | None = None,
    *,
    worktrees: list[git.WorktreeInfo] | None = None,
    remove: Callable[[Path], None] = shutil.rmtree,
) -> DeleteAllResult:
    """Delete every linked worktree directory, then prune git's records once.

    Per-worktree failures are collected on the result rather than raised.
    """
    main = home_path(cwd)
    if worktrees is None:
        worktrees = linked_worktrees(cwd)
    result = DeleteAllResult()
    for wt in worktrees:
        try:
            remove(wt.path)
        except OSError as exc:
            result.failed.append((wt, str(exc)))
            continue
        result.deleted.append(wt)

    if result.deleted:
        try:
            git.prune_worktrees(cwd=main)
        except GitError as exc:
            result.prune_error = str(exc)
    return result
