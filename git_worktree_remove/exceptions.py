"""Custom exceptions for git-worktree-remove"""

from typing import Optional


class WorktreeRemoveError(Exception):
    """Base exception for all git-worktree-remove errors."""
    pass


class GitOperationError(WorktreeRemoveError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, path: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.path = path
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if path:
            error_msg += f" for '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ResolutionError(WorktreeRemoveError):
    """Exception raised when a target is ambiguous or cannot be found."""
    pass


class SafetyViolation(WorktreeRemoveError):
    """Exception raised when a removal could damage the main worktree.

    Never retried and never overridden by --force.
    """
    pass


class PromptDisabledError(WorktreeRemoveError):
    """Exception raised when a confirmation is required but prompting is disabled."""
    pass
