"""Resolve gitignore-style patterns against a source tree.

Glob syntax follows gitignore rules (implemented by
``dulwich.ignore.Pattern``).  Unlike a ``.gitignore`` file, a pattern
without a leading ``/`` always matches at any depth, even when it contains
a slash in the middle (``config/local.json`` also matches
``pkg/config/local.json``).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from dulwich.ignore import Pattern

from ._types import EntryKind, ResolvedEntry, SyncError, SyncPattern

_SKIP_DIRS = frozenset({".git"})


def _compile(pattern: str) -> Pattern:
    """Compile a file glob, anchoring it only when it starts with ``/``."""
    if not pattern.startswith("/") and not pattern.startswith("**/"):
        pattern = "**/" + pattern
    return Pattern(pattern.encode("utf-8"))


def _walk(base: Path, rel_dir: str = "") -> Iterator[tuple[str, os.DirEntry]]:
    """Yield ``(rel_path, entry)`` for one directory, in listing order.

    ``.git`` is never yielded.  Recursion is left to the caller so it can
    decide per directory whether to descend.
    """
    with os.scandir(base / rel_dir if rel_dir else base) as it:
        entries = list(it)
    for entry in entries:
        if entry.name in _SKIP_DIRS:
            continue
        rel = f"{rel_dir}/{entry.name}" if rel_dir else entry.name
        yield rel, entry


def _match_files(base: Path, compiled: Pattern, rel_dir: str = "",
                 unreadable: list[SyncError] | None = None) -> Iterator[str]:
    for rel, entry in _walk(base, rel_dir):
        if entry.is_dir(follow_symlinks=False):
            # Matched directories are left alone; only "dir/" patterns
            # transfer a directory.
            encoded = rel.encode("utf-8")
            if compiled.match(encoded) or compiled.match(encoded + b"/"):
                continue
            try:
                yield from _match_files(base, compiled, rel, unreadable)
            except OSError as exc:
                # Skip the subtree; the rest of the walk still counts.
                if unreadable is not None:
                    unreadable.append(SyncError(path=rel + "/", error=str(exc)))
        elif entry.is_file(follow_symlinks=False):
            if compiled.match(rel.encode("utf-8")):
                yield rel


def resolve(
    source_root: str | os.PathLike,
    pattern: str | SyncPattern,
    *,
    unreadable: list[SyncError] | None = None,
) -> list[ResolvedEntry]:
    """Return the entries under *source_root* that *pattern* selects.

    * ``!pattern`` resolves to nothing (negation is not supported).
    * ``dir/`` resolves to the directory itself when it exists.
    * Anything else is a file glob; see the module docstring.

    Entries come back in walk order.  No match is not an error.  A
    subdirectory that cannot be listed is skipped and, when *unreadable*
    is given, recorded there.
    """
    if not isinstance(pattern, SyncPattern):
        pattern = SyncPattern(pattern)
    if pattern.negated:
        return []

    base = Path(source_root)

    if pattern.is_directory:
        dir_path = pattern.raw.rstrip("/").lstrip("/")
        if not dir_path:
            return []
        full = base / dir_path
        if full.is_dir() and not full.is_symlink():
            return [ResolvedEntry(dir_path, EntryKind.DIRECTORY)]
        return []

    if not base.is_dir():
        return []
    compiled = _compile(pattern.raw)
    return [
        ResolvedEntry(rel, EntryKind.FILE)
        for rel in _match_files(base, compiled, unreadable=unreadable)
    ]
