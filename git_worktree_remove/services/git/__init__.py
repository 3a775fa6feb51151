"""Git-related services for git-worktree-remove."""

from .worktrees import WorktreeService, parse_worktree_list

__all__ = [
    "WorktreeService",
    "parse_worktree_list",
]
