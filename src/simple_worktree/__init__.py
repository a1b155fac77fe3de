"""simple_worktree — git worktrees with their untracked local files."""

from .config import Config, load_config, init_config, find_config_path
from .exceptions import (
    ConfigError,
    GitError,
    NotAGitRepositoryError,
    WorktreeError,
    WorktreeNotFoundError,
)
from .sync import (
    SyncReport,
    TransferMode,
    GitCheckIgnore,
    MemoryIgnoreOracle,
    sync_files,
)
from .worktree import (
    create_worktree,
    delete_worktree,
    delete_all_worktrees,
    find_worktree,
    home_path,
)

__all__ = [
    "Config", "load_config", "init_config", "find_config_path",
    "ConfigError", "GitError", "NotAGitRepositoryError", "WorktreeError",
    "WorktreeNotFoundError",
    "SyncReport", "TransferMode", "GitCheckIgnore", "MemoryIgnoreOracle",
    "sync_files",
    "create_worktree", "delete_worktree", "delete_all_worktrees",
    "find_worktree", "home_path",
]
