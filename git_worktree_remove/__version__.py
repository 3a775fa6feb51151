"""Version information for git-worktree-remove."""

__version__ = "0.3.0"
