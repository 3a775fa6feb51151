"""Data models for git-worktree-remove."""
