"""Formatting utilities for git-worktree-remove.

- removal: target status wording, reference info and confirmation messages
"""

from .removal import (
    format_removal_status,
    format_reference_info,
    get_removal_display,
    format_single_confirmation,
    format_batch_confirmation,
    format_dirty_confirmation,
    format_dirty_summary,
)

__all__ = [
    "format_removal_status",
    "format_reference_info",
    "get_removal_display",
    "format_single_confirmation",
    "format_batch_confirmation",
    "format_dirty_confirmation",
    "format_dirty_summary",
]
