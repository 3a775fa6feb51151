"""Command-line argument parsing for git-worktree-remove."""

import argparse
from typing import Optional, Sequence

from git_worktree_remove.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-worktree-remove",
        description="Remove git worktrees and orphaned worktree directories. "
        "Directories are moved to the trash before they are unregistered from git.",
        epilog="A target is a branch name, a worktree path, or the directory name of a worktree. "
        "Several targets are confirmed once and removed in parallel. Ctrl-C stops removals that have not "
        "started; removals already running finish before the command exits.",
    )
    parser.add_argument(
        "targets",
        nargs="+",
        metavar="TARGET",
        help="Branch name, worktree path, or directory name of the worktree to remove",
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-remove {__version__}")
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Preview mode - show what would be removed without removing anything",
    )
    parser.add_argument("-y", "--yes", action="store_true", help="Answer yes to all confirmations")
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Remove worktrees with uncommitted changes and unregister even if the trash move fails",
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Never prompt; fail when a confirmation would be needed (for scripts/automation)",
    )
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument("-v", "--verbose", action="store_true", help="Show each removal step")
    output_group.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
