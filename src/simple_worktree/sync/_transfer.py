"""Link or copy a resolved entry from one worktree into another."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from ._types import EntryKind, TransferMode, TransferResult


def _target_exists(target: Path) -> bool:
    """True for any existing path, including dangling symlinks."""
    return os.path.lexists(target)


def _link(source: Path, target: Path) -> None:
    target.symlink_to(source.absolute(), target_is_directory=source.is_dir())


def _copy(source: Path, target: Path, kind: EntryKind) -> None:
    if kind == EntryKind.DIRECTORY:
        # Nested symlinks are dereferenced and copied as regular files.
        shutil.copytree(source, target, symlinks=False)
    else:
        shutil.copy2(source, target)


def transfer(
    source_path: str | os.PathLike,
    target_path: str | os.PathLike,
    kind: EntryKind,
    mode: TransferMode,
    *,
    display: str | None = None,
) -> TransferResult:
    """Link or copy *source_path* to *target_path*.

    An existing target (file, directory, or symlink) is never touched: the
    call reports ``performed=False`` instead.  Filesystem errors are caught
    and returned on the result so one failure does not stop a batch.

    *display* is the relative path recorded on the result; it defaults to
    the target path.
    """
    source = Path(source_path)
    target = Path(target_path)
    result = TransferResult(
        path=display if display is not None else str(target),
        kind=kind,
        mode=mode,
    )

    if _target_exists(target):
        return result

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if mode == TransferMode.LINK:
            _link(source, target)
        else:
            _copy(source, target, kind)
    except (OSError, shutil.Error) as exc:
        result.error = str(exc)
        return result

    result.performed = True
    return result
