"""Loading and creating ``swtconfig.toml``.

The config is looked up in the current directory first and then as
``~/.swtconfig.toml``.  A missing or broken file is never fatal: the
defaults apply and the problem is recorded on :attr:`Config.warnings`.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .exceptions import ConfigError

CONFIG_FILENAME = "swtconfig.toml"
DEFAULT_WORKTREE_DIR = "../"

CONFIG_TEMPLATE = """\
# simple-worktree configuration

# Where to create worktrees by default
# Can be relative path (e.g., "../", "../../worktrees/")
# or absolute path (e.g., "/home/user/worktrees/")
defaultWorktreeDir = "../"

# Whether to automatically add synced files to .gitignore
addToGitignore = true

# Files to symlink into new worktrees (gitignore syntax)
# Only list files that are NOT committed to git
filesToSync = [
  # "# Local environment files",
  # ".env",
  # ".env.local",
  # "",
  # "# IDE settings",
  # ".vscode/",
  # ".idea/workspace.xml"
]

# Files to copy (not link) into new worktrees, same syntax
filesToCopy = [
  # ".env.development.local",
]
"""


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


@dataclass
class Config:
    """Settings read from ``swtconfig.toml``.

    Attributes:
        default_worktree_dir: Where new worktrees go (``defaultWorktreeDir``).
        add_to_gitignore: Record synced paths in ``.gitignore``
            (``addToGitignore``).
        files_to_sync: Raw patterns to symlink (``filesToSync``).
        files_to_copy: Raw patterns to copy (``filesToCopy``).
        path: The file the settings came from, or ``None`` for defaults.
        warnings: Problems met while loading.
    """
    default_worktree_dir: str = DEFAULT_WORKTREE_DIR
    add_to_gitignore: bool = True
    files_to_sync: list[str] = field(default_factory=list)
    files_to_copy: list[str] = field(default_factory=list)
    path: Path | None = None
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: Path | None = None) -> Config:
        """Build a config from parsed TOML, ignoring values of the wrong type."""
        worktree_dir = data.get("defaultWorktreeDir")
        if not isinstance(worktree_dir, str) or not worktree_dir:
            worktree_dir = DEFAULT_WORKTREE_DIR
        add = data.get("addToGitignore", True)
        if not isinstance(add, bool):
            add = True
        return cls(
            default_worktree_dir=worktree_dir,
            add_to_gitignore=add,
            files_to_sync=_string_list(data.get("filesToSync")),
            files_to_copy=_string_list(data.get("filesToCopy")),
            path=path,
        )

    @property
    def has_patterns(self) -> bool:
        """True if any link or copy pattern is configured."""
        return bool(self.files_to_sync or self.files_to_copy)


def find_config_path(cwd: str | os.PathLike | None = None,
                     home: str | os.PathLike | None = None) -> Path | None:
    """Return the config file to use, or ``None`` if there is none."""
    local = Path(cwd if cwd is not None else Path.cwd()) / CONFIG_FILENAME
    if local.is_file():
        return local
    home_cfg = Path(home if home is not None else Path.home()) / f".{CONFIG_FILENAME}"
    if home_cfg.is_file():
        return home_cfg
    return None


def load_config(cwd: str | os.PathLike | None = None,
                home: str | os.PathLike | None = None) -> Config:
    """Load the config for *cwd*, falling back to defaults."""
    path = find_config_path(cwd, home)
    if path is None:
        return Config()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        config = Config()
        config.warnings.append(f"Error reading {path}: {exc}")
        return config
    return Config.from_dict(data, path=path)


def init_config(directory: str | os.PathLike | None = None) -> Path:
    """Write a commented ``swtconfig.toml`` into *directory*.

    Raises:
        ConfigError: If the file already exists or cannot be written.
    """
    path = Path(directory if directory is not None else Path.cwd()) / CONFIG_FILENAME
    if path.exists():
        raise ConfigError(f"Config file already exists: {path}")
    try:
        path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Error creating config: {exc}") from exc
    return path


def resolve_worktree_dir(config: Config, name: str,
                         custom_path: str | os.PathLike | None = None,
                         git_root: str | os.PathLike | None = None) -> Path:
    """Return where the worktree called *name* should be created.

    *custom_path* wins outright.  A relative ``defaultWorktreeDir`` is
    taken relative to *git_root*.
    """
    if custom_path:
        return Path(custom_path).absolute()
    base = Path(config.default_worktree_dir).expanduser()
    if not base.is_absolute():
        if git_root is None:
            raise ConfigError(
                "A git root is required to resolve a relative defaultWorktreeDir"
            )
        base = Path(git_root) / base
    return Path(os.path.normpath(base / name))
