"""Drive pattern resolution, transfers, and ``.gitignore`` updates."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, TYPE_CHECKING

from ._gitignore import IgnoreOracle, reconcile
from ._match import resolve
from ._transfer import transfer
from ._types import SyncError, SyncPattern, SyncReport, TransferMode, TransferResult

if TYPE_CHECKING:
    from ..config import Config


def parse_patterns(entries: Iterable[object], mode: TransferMode) -> list[SyncPattern]:
    """Turn raw config entries into patterns.

    Entries are trimmed; blank lines, ``#`` comment lines, and anything
    that is not a string are dropped.
    """
    patterns = []
    for item in entries or ():
        if not isinstance(item, str):
            continue
        stripped = item.strip()
        if not stripped or stripped.startswith("#"):
            continue
        patterns.append(SyncPattern(stripped, mode))
    return patterns


def sync_pattern(source_root: str | os.PathLike, target_root: str | os.PathLike,
                 pattern: SyncPattern, *,
                 unreadable: list[SyncError] | None = None) -> list[TransferResult]:
    """Resolve *pattern* under *source_root* and transfer every match."""
    source = Path(source_root)
    target = Path(target_root)
    results = []
    for entry in resolve(source, pattern, unreadable=unreadable):
        results.append(transfer(
            source / entry.path, target / entry.path,
            entry.kind, pattern.mode, display=entry.ignore_path,
        ))
    return results


def _is_own_link(source: Path, target: Path, result: TransferResult) -> bool:
    """True when a skipped LINK target is already our symlink to the source.

    A sync interrupted before ``.gitignore`` was updated leaves such links
    behind; they still need recording.  Anything else in the way belongs to
    the user.
    """
    if result.mode != TransferMode.LINK or result.error is not None:
        return False
    rel = result.path.rstrip("/")
    link = target / rel
    try:
        return link.is_symlink() and os.readlink(link) == str((source / rel).absolute())
    except OSError:
        return False


def _sync_group(source: Path, target: Path, patterns: list[SyncPattern],
                report: SyncReport, *, add_to_gitignore: bool,
                oracle: IgnoreOracle | None) -> None:
    transferred: list[str] = []
    for pattern in patterns:
        unreadable: list[SyncError] = []
        try:
            results = sync_pattern(source, target, pattern, unreadable=unreadable)
        except OSError as exc:
            # Unreadable source root: skip the pattern, keep going.
            report.warnings.append(SyncError(path=pattern.raw, error=str(exc)))
            continue
        reported = {w.path for w in report.warnings}
        for err in unreadable:
            if err.path not in reported:
                report.warnings.append(err)
                reported.add(err.path)
        for r in results:
            report.record(r)
            if r.performed or _is_own_link(source, target, r):
                transferred.append(r.path)

    if not add_to_gitignore or not transferred:
        return
    outcome = reconcile(target, transferred, oracle)
    report.ignored.extend(outcome.added)
    report.covered.extend(outcome.covered)
    report.warnings.extend(outcome.warnings)


def sync_files(
    source_root: str | os.PathLike,
    target_root: str | os.PathLike,
    config: Config,
    *,
    oracle: IgnoreOracle | None = None,
) -> SyncReport:
    """Propagate configured files from *source_root* into *target_root*.

    Copy patterns (``filesToCopy``) are handled before link patterns
    (``filesToSync``); each group updates ``.gitignore`` in its own pass.
    Existing targets are never overwritten, so running this again is safe.

    Never raises for filesystem problems: they are collected on
    :attr:`SyncReport.warnings`.

    Args:
        source_root: Worktree holding the files of record.
        target_root: Newly created worktree.
        config: Settings providing the patterns and ``addToGitignore``.
        oracle: Ignore check used for ``.gitignore`` dedup; defaults to
            ``git check-ignore``.
    """
    source = Path(source_root)
    target = Path(target_root)
    report = SyncReport()

    groups = (
        parse_patterns(config.files_to_copy, TransferMode.COPY),
        parse_patterns(config.files_to_sync, TransferMode.LINK),
    )
    for patterns in groups:
        if patterns:
            _sync_group(source, target, patterns, report,
                        add_to_gitignore=config.add_to_gitignore, oracle=oracle)
    return report
