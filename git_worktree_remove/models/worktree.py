"""Worktree data models."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class WorktreeEntry:
    """One working tree reported by ``git worktree list``.

    ``branch`` is the short branch name and is only set when the worktree is
    not detached.
    """

    path: str
    head: Optional[str] = None
    branch: Optional[str] = None
    is_detached: bool = False

    def __str__(self) -> str:
        """String representation of worktree."""
        if self.branch:
            reference = self.branch
        elif self.head:
            reference = f"detached @ {self.head[:7]}"
        else:
            reference = "detached"
        return f"{reference} @ {self.path}"


@dataclass(frozen=True)
class WorktreeList:
    """Snapshot of a repository's worktrees, taken once per invocation.

    ``worktrees`` excludes the main worktree, whose path is ``main_path``.
    """

    main_path: str
    worktrees: List[WorktreeEntry] = field(default_factory=list)
