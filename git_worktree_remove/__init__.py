"""
git-worktree-remove - Safely remove git worktrees and orphaned worktree directories
"""

from .__version__ import __version__
from .core import WorktreeRemover
from .models.target import RemovalOutcome

__all__ = ["WorktreeRemover", "RemovalOutcome", "__version__"]
