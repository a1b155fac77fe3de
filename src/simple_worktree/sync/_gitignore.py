"""Record synced paths in the target worktree's ``.gitignore``.

Paths that git already ignores through some inherited rule (a parent
``.gitignore``, ``info/exclude``, ``core.excludesFile``) are left out, so a
broad ``node_modules`` rule does not get a ``node_modules/tmp.lock`` line
next to it.  That check is delegated to an :class:`IgnoreOracle`.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from ._types import SyncError

GITIGNORE = ".gitignore"
SECTION_MARKER = "# simple-worktree synced files"


# ---------------------------------------------------------------------------
# Ignore oracles
# ---------------------------------------------------------------------------

class IgnoreOracle(Protocol):
    """Answers whether git would ignore a path inside a working tree."""

    def is_ignored(self, path: str, cwd: str | os.PathLike) -> bool: ...


class GitCheckIgnore:
    """Ask ``git check-ignore`` whether a path is ignored.

    Any failure to get an answer (no ``git`` binary, not inside a work
    tree, path beyond a symlink) counts as "not ignored".
    """

    def __init__(self, git: str = "git", timeout: float | None = 10):
        self._git = git
        self._timeout = timeout

    def is_ignored(self, path: str, cwd: str | os.PathLike) -> bool:
        try:
            proc = subprocess.run(
                [self._git, "check-ignore", "-q", "--", path],
                cwd=cwd, capture_output=True, text=True, timeout=self._timeout,
            )
        except (OSError, subprocess.TimeoutExpired):
            return False
        return proc.returncode == 0


class MemoryIgnoreOracle:
    """In-memory oracle: a path is ignored iff it was registered.

    Paths compare with any trailing slash stripped.
    """

    def __init__(self, ignored: Iterable[str] = ()):
        self._ignored = {_normalize(p) for p in ignored}
        self.queries: list[str] = []

    def is_ignored(self, path: str, cwd: str | os.PathLike) -> bool:
        self.queries.append(path)
        return _normalize(path) in self._ignored


# ---------------------------------------------------------------------------
# .gitignore content
# ---------------------------------------------------------------------------

def _normalize(line: str) -> str:
    return line.rstrip("/")


@dataclass
class IgnoreFile:
    """Parsed ``.gitignore`` content.

    Attributes:
        content: Raw text as read (empty when the file does not exist).
        patterns: Non-blank, non-comment lines with trailing ``/`` stripped.
    """
    content: str = ""
    patterns: set[str] = field(default_factory=set)

    @classmethod
    def parse(cls, content: str) -> IgnoreFile:
        patterns = set()
        for line in content.splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#"):
                patterns.add(_normalize(stripped))
        return cls(content=content, patterns=patterns)

    def contains(self, path: str) -> bool:
        return _normalize(path) in self.patterns

    def append_section(self, paths: Sequence[str]) -> str:
        """Return the content with a marked section listing *paths*."""
        text = self.content
        if text and not text.endswith("\n"):
            text += "\n"
        if text:
            text += "\n"
        text += SECTION_MARKER + "\n"
        for p in paths:
            text += p + "\n"
            self.patterns.add(_normalize(p))
        self.content = text
        return text


@dataclass
class ReconcileResult:
    """Outcome of :func:`reconcile`.

    Attributes:
        added: Paths appended to ``.gitignore``, in order.
        covered: Paths git already ignored.
        warnings: Read/write problems; the file is left as it was.
    """
    added: list[str] = field(default_factory=list)
    covered: list[str] = field(default_factory=list)
    warnings: list[SyncError] = field(default_factory=list)


def reconcile(
    target_root: str | os.PathLike,
    paths: Sequence[str],
    oracle: IgnoreOracle | None = None,
) -> ReconcileResult:
    """Append the not-yet-ignored entries of *paths* to ``target_root/.gitignore``.

    Existing lines are compared with trailing slashes stripped, so
    ``.idea`` and ``.idea/`` count as the same pattern.  Nothing is written
    when there is nothing new to add.
    """
    if oracle is None:
        oracle = GitCheckIgnore()
    result = ReconcileResult()
    gitignore = Path(target_root) / GITIGNORE

    if os.path.lexists(gitignore) and not gitignore.is_file():
        # Dangling symlink, directory, or similar: never write through it.
        result.warnings.append(SyncError(
            path=str(gitignore), error="could not update: not a regular file",
        ))
        return result

    try:
        if gitignore.is_file():
            ignore_file = IgnoreFile.parse(gitignore.read_text(encoding="utf-8"))
        else:
            ignore_file = IgnoreFile()
    except (OSError, UnicodeDecodeError) as exc:
        result.warnings.append(SyncError(
            path=str(gitignore), error=f"could not read: {exc}",
        ))
        return result

    pending: list[str] = []
    queued: set[str] = set()
    for p in paths:
        if oracle.is_ignored(p, target_root):
            result.covered.append(p)
            continue
        key = _normalize(p)
        if ignore_file.contains(p) or key in queued:
            continue
        queued.add(key)
        pending.append(p)

    if not pending:
        return result

    content = ignore_file.append_section(pending)
    try:
        gitignore.write_text(content, encoding="utf-8")
    except OSError as exc:
        result.warnings.append(SyncError(
            path=str(gitignore), error=f"could not update: {exc}",
        ))
        return result

    result.added.extend(pending)
    return result
