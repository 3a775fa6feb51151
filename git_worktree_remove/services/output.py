"""Leveled user-facing output for git-worktree-remove"""

from typing import Optional

from rich.console import Console
from rich.text import Text

from git_worktree_remove.utils.logging import get_logger

logger = get_logger(__name__)

DRY_RUN_PREFIX = "DRY RUN: "


class OutputWriter:
    """Info/warn/error sink shared by every removal in an invocation.

    Info messages are progress detail and only appear in verbose or dry-run
    mode. Warnings are suppressed by quiet mode. Errors are always shown.
    Messages are rendered as plain text, so paths containing brackets are
    never read as rich markup.
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        dry_run: bool = False,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.quiet = quiet
        self.dry_run = dry_run
        self.console = console or Console(stderr=True)

    @property
    def shows_info(self) -> bool:
        return not self.quiet and (self.verbose or self.dry_run)

    def info(self, message: str) -> None:
        logger.debug(message)
        if not self.shows_info:
            return
        prefix = DRY_RUN_PREFIX if self.dry_run else ""
        self.console.print(Text(f"{prefix}{message}"), soft_wrap=True)

    def warn(self, message: str) -> None:
        logger.debug(message)
        if self.quiet:
            return
        self.console.print(Text(message, style="yellow"), soft_wrap=True)

    def error(self, message: str) -> None:
        logger.debug(message)
        self.console.print(Text(message, style="red"), soft_wrap=True)
