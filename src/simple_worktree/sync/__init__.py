"""Propagate untracked local files between worktrees.

Patterns use gitignore syntax.  ``dir/`` transfers a directory whole,
``/name`` is anchored to the worktree root, and ``!name`` is accepted but
ignored.  Matches are either symlinked or copied; existing files in the
target are never overwritten, and synced paths are recorded in the
target's ``.gitignore``.
"""

from ._types import (
    EntryKind,
    ResolvedEntry,
    SyncError,
    SyncPattern,
    SyncReport,
    TransferMode,
    TransferResult,
)
from ._match import resolve
from ._transfer import transfer
from ._gitignore import (
    SECTION_MARKER,
    GitCheckIgnore,
    IgnoreFile,
    IgnoreOracle,
    MemoryIgnoreOracle,
    ReconcileResult,
    reconcile,
)
from ._ops import parse_patterns, sync_files, sync_pattern

__all__ = [
    # Types
    "EntryKind", "ResolvedEntry", "SyncError", "SyncPattern", "SyncReport",
    "TransferMode", "TransferResult", "IgnoreFile", "ReconcileResult",
    # Ignore oracles
    "IgnoreOracle", "GitCheckIgnore", "MemoryIgnoreOracle",
    # Operations
    "resolve", "transfer", "reconcile", "parse_patterns",
    "sync_pattern", "sync_files",
    "SECTION_MARKER",
]
