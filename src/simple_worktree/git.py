"""Thin wrappers around the ``git`` command line."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .exceptions import GitError, NotAGitRepositoryError


def _git(*args: str, cwd: str | os.PathLike | None = None) -> str:
    """Run ``git *args`` and return stripped stdout.

    Raises:
        GitError: If git exits non-zero or cannot be started.
    """
    try:
        proc = subprocess.run(
            ["git", *args], cwd=cwd, capture_output=True, text=True,
        )
    except OSError as exc:
        raise GitError(args, str(exc)) from exc
    if proc.returncode != 0:
        raise GitError(args, proc.stderr)
    return proc.stdout.strip()


def is_git_repo(cwd: str | os.PathLike | None = None) -> bool:
    try:
        _git("rev-parse", "--git-dir", cwd=cwd)
    except GitError:
        return False
    return True


def require_git_repo(cwd: str | os.PathLike | None = None) -> None:
    """Raise :class:`NotAGitRepositoryError` unless *cwd* is inside a repo."""
    if not is_git_repo(cwd):
        raise NotAGitRepositoryError("Not in a git repository")


def git_root(cwd: str | os.PathLike | None = None) -> Path:
    """Top-level directory of the working tree containing *cwd*."""
    return Path(_git("rev-parse", "--show-toplevel", cwd=cwd))


def git_dir(cwd: str | os.PathLike | None = None) -> Path:
    """Absolute git directory for *cwd* (``.git/worktrees/<name>`` in a linked worktree)."""
    return Path(_git("rev-parse", "--absolute-git-dir", cwd=cwd))


def is_worktree(cwd: str | os.PathLike | None = None) -> bool:
    """True if *cwd* is inside a linked (non-main) worktree."""
    try:
        gd = git_dir(cwd)
    except GitError:
        return False
    return gd.parent.name == "worktrees" and gd.parent.parent.name == ".git"


def branch_exists(branch: str, cwd: str | os.PathLike | None = None) -> bool:
    try:
        _git("show-ref", "--verify", "--quiet", f"refs/heads/{branch}", cwd=cwd)
    except GitError:
        return False
    return True


# ---------------------------------------------------------------------------
# Worktree listing
# ---------------------------------------------------------------------------

@dataclass
class WorktreeInfo:
    """One entry of ``git worktree list --porcelain``.

    Attributes:
        path: Worktree directory.
        head: Commit checked out, if reported.
        branch: Branch name without ``refs/heads/``, or ``None`` when detached.
        bare: True for a bare main repository.
        detached: True when HEAD is detached.
    """
    path: Path
    head: str | None = None
    branch: str | None = None
    bare: bool = False
    detached: bool = False

    @property
    def name(self) -> str:
        return self.path.name


def parse_worktree_porcelain(output: str) -> list[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output, main worktree first."""
    worktrees: list[WorktreeInfo] = []
    current: WorktreeInfo | None = None
    for line in output.splitlines():
        if line.startswith("worktree "):
            if current is not None:
                worktrees.append(current)
            current = WorktreeInfo(path=Path(line[len("worktree "):]))
        elif current is None:
            continue
        elif line.startswith("HEAD "):
            current.head = line[len("HEAD "):]
        elif line.startswith("branch "):
            ref = line[len("branch "):]
            current.branch = ref.removeprefix("refs/heads/")
        elif line == "bare":
            current.bare = True
        elif line == "detached":
            current.detached = True
        elif line == "":
            worktrees.append(current)
            current = None
    if current is not None:
        worktrees.append(current)
    return worktrees


def list_worktrees(cwd: str | os.PathLike | None = None) -> list[WorktreeInfo]:
    return parse_worktree_porcelain(_git("worktree", "list", "--porcelain", cwd=cwd))


def main_worktree_path(cwd: str | os.PathLike | None = None) -> Path | None:
    """The main worktree (always listed first by git), or ``None``."""
    try:
        worktrees = list_worktrees(cwd)
    except GitError:
        return None
    return worktrees[0].path if worktrees else None


# ---------------------------------------------------------------------------
# Worktree mutation
# ---------------------------------------------------------------------------

def add_worktree(path: str | os.PathLike, branch: str, *, create_branch: bool,
                 cwd: str | os.PathLike | None = None) -> None:
    if create_branch:
        _git("worktree", "add", "-b", branch, str(path), cwd=cwd)
    else:
        _git("worktree", "add", str(path), branch, cwd=cwd)


def remove_worktree(path: str | os.PathLike, *, force: bool = False,
                    cwd: str | os.PathLike | None = None) -> None:
    args = ["worktree", "remove", str(path)]
    if force:
        args.append("--force")
    _git(*args, cwd=cwd)


def prune_worktrees(cwd: str | os.PathLike | None = None) -> None:
    _git("worktree", "prune", cwd=cwd)
