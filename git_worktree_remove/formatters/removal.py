"""Removal target formatting."""

import sys
from typing import List, Optional, Sequence

from git_worktree_remove.constants import SHORT_SHA_LENGTH, RemovalStatus
from git_worktree_remove.models.target import BatchTarget, RemovalDisplay
from git_worktree_remove.models.worktree import WorktreeEntry
from git_worktree_remove.utils.paths import get_path_module


def format_removal_status(registered_path: Optional[str], is_path_input: bool) -> str:
    """Wording for the kind of target; it never affects safety rules."""
    if registered_path:
        return RemovalStatus.REGISTERED
    if is_path_input:
        return RemovalStatus.UNREGISTERED
    return RemovalStatus.ORPHANED


def format_reference_info(worktree: Optional[WorktreeEntry]) -> str:
    """Describe what a registered worktree has checked out."""
    if worktree is None:
        return ""
    if worktree.branch:
        return f"branch {worktree.branch}"
    if worktree.head:
        return f"detached HEAD @ {worktree.head[:SHORT_SHA_LENGTH]}"
    return "detached HEAD"


def get_removal_display(
    cwd: str,
    target_path: str,
    registered_path: Optional[str],
    registered_worktree: Optional[WorktreeEntry],
    is_path_input: bool,
    platform: str = sys.platform,
) -> RemovalDisplay:
    """Build the user-facing description of a removal target.

    Path input is echoed as the absolute target path; names are shown
    relative to the invocation directory.
    """
    pathmod = get_path_module(platform)

    if is_path_input:
        display_path = target_path
    else:
        try:
            display_path = pathmod.relpath(target_path, cwd)
        except ValueError:
            # Different drives
            display_path = target_path
        if display_path == pathmod.curdir:
            display_path = target_path

    return RemovalDisplay(
        status=format_removal_status(registered_path, is_path_input),
        reference_info=format_reference_info(registered_worktree if registered_path else None),
        display_path=display_path,
        target_name=pathmod.basename(target_path),
    )


def format_single_confirmation(display: RemovalDisplay) -> str:
    reference = f" ({display.reference_info})" if display.reference_info else ""
    return f"Remove {display.status} '{display.target_name}' ({display.display_path}){reference}?"


def format_batch_confirmation(targets: Sequence[BatchTarget]) -> str:
    """One question covering every target; a single target keeps the compact form."""
    if len(targets) == 1:
        return format_single_confirmation(targets[0].display)

    lines: List[str] = [f"Remove {len(targets)} worktrees?"]
    for target in targets:
        display = target.display
        reference = f", {display.reference_info}" if display.reference_info else ""
        lines.append(f"  {display.status} '{display.target_name}' ({display.display_path}{reference})")
    return "\n".join(lines)


def format_dirty_confirmation(dirty_targets: Sequence[BatchTarget]) -> str:
    return f"{format_dirty_summary(dirty_targets)}. Remove anyway?"


def format_dirty_summary(dirty_targets: Sequence[BatchTarget]) -> str:
    names = ", ".join(target.display.target_name for target in dirty_targets)
    count = len(dirty_targets)
    noun = "worktrees have" if count > 1 else "worktree has"
    return f"{count} {noun} uncommitted changes ({names})"
