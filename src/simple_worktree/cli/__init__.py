"""simple-worktree CLI — manage git worktrees and their local files."""

from ._helpers import main  # noqa: F401 — entry point

# Import command modules to register Click commands with the main group.
from . import _worktree, _sync  # noqa: F401
