"""Data structures for file propagation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TransferMode(str, Enum):
    """How a resolved path reaches the target worktree: ``LINK`` or ``COPY``."""
    LINK = "link"
    COPY = "copy"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class EntryKind(str, Enum):
    """Kind of a resolved path: ``FILE`` or ``DIRECTORY``."""
    FILE = "file"
    DIRECTORY = "directory"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True)
class SyncPattern:
    """A gitignore-style pattern tagged with its transfer mode.

    Attributes:
        raw: The pattern as written in the config (already trimmed).
        mode: :class:`TransferMode` used for every path it resolves to.
    """
    raw: str
    mode: TransferMode = TransferMode.LINK

    @property
    def negated(self) -> bool:
        """``True`` for ``!pattern`` entries, which never resolve."""
        return self.raw.startswith("!")

    @property
    def is_directory(self) -> bool:
        """``True`` for ``dir/`` entries, which transfer the directory whole."""
        return self.raw.endswith("/")


@dataclass(frozen=True)
class ResolvedEntry:
    """A path under the source root that matched a pattern.

    Attributes:
        path: Relative path (forward slashes, no trailing slash).
        kind: :class:`EntryKind` of the entry.
    """
    path: str
    kind: EntryKind

    @property
    def ignore_path(self) -> str:
        """The form written to ``.gitignore`` (directories keep a trailing ``/``)."""
        if self.kind == EntryKind.DIRECTORY:
            return self.path + "/"
        return self.path


@dataclass
class TransferResult:
    """Outcome of a single link or copy.

    Attributes:
        path: Relative path in ``.gitignore`` form.
        kind: :class:`EntryKind` of the transferred entry.
        mode: :class:`TransferMode` that was attempted.
        performed: ``False`` when the target already existed or on error.
        error: Human-readable error message, if the transfer failed.
    """
    path: str
    kind: EntryKind
    mode: TransferMode
    performed: bool = False
    error: str | None = None


@dataclass
class SyncError:
    """A path that could not be synced, surfaced as a warning.

    Attributes:
        path: The path that caused the problem.
        error: Human-readable error message.
    """
    path: str
    error: str


@dataclass
class SyncReport:
    """Result of :func:`~simple_worktree.sync.sync_files`.

    Attributes:
        linked: Paths symlinked into the target.
        copied: Paths copied into the target.
        skipped: Paths whose target already existed.
        ignored: Paths appended to the target's ``.gitignore``.
        covered: Paths already ignored by an existing rule.
        warnings: Non-fatal problems (failed transfers, unreadable
            source directories or ``.gitignore``).
    """
    linked: list[str] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)
    covered: list[str] = field(default_factory=list)
    warnings: list[SyncError] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of paths linked or copied."""
        return len(self.linked) + len(self.copied)

    @property
    def in_sync(self) -> bool:
        """``True`` if nothing had to be transferred or recorded."""
        return self.total == 0 and not self.ignored

    def record(self, result: TransferResult) -> None:
        """Fold one :class:`TransferResult` into the report."""
        if result.error is not None:
            self.warnings.append(SyncError(path=result.path, error=result.error))
        elif not result.performed:
            self.skipped.append(result.path)
        elif result.mode == TransferMode.LINK:
            self.linked.append(result.path)
        else:
            self.copied.append(result.path)
