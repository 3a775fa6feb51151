"""Core removal orchestration."""

from .worktree_remover import WorktreeRemover

__all__ = ["WorktreeRemover"]
