"""Exceptions for simple_worktree."""


class WorktreeError(Exception):
    """Base class for worktree workflow failures."""


class GitError(WorktreeError):
    """Raised when a git command exits non-zero.

    The message carries git's stderr so callers can show it verbatim.
    """

    def __init__(self, args, stderr: str = ""):
        self.git_args = list(args)
        self.stderr = stderr.strip()
        cmd = " ".join(["git", *self.git_args])
        msg = f"{cmd} failed"
        if self.stderr:
            msg += f": {self.stderr}"
        super().__init__(msg)


class NotAGitRepositoryError(WorktreeError):
    """Raised when a command needs a git repository and there is none."""


class WorktreeNotFoundError(WorktreeError):
    """Raised when no worktree matches a directory or branch name.

    ``available`` holds the worktrees that could have matched.
    """

    def __init__(self, name: str, available=()):
        self.name = name
        self.available = list(available)
        super().__init__(f"Worktree '{name}' not found")


class ConfigError(WorktreeError):
    """Raised when a configuration file cannot be created."""
