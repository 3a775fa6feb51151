"""Interactive confirmation for git-worktree-remove"""

from threading import Lock
from typing import Optional

from rich.console import Console
from rich.text import Text

from git_worktree_remove.exceptions import PromptDisabledError
from git_worktree_remove.utils.logging import get_logger

logger = get_logger(__name__)


class Prompter:
    """Yes/no prompts on the shared terminal.

    Stdin is shared by every removal in an invocation, so at most one prompt
    may be pending at any time. ``_prompt_lock`` serializes them.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)
        self._prompt_lock = Lock()

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question. Anything but "y"/"yes" is a no."""
        with self._prompt_lock:
            response = self.console.input(Text(f"{message} [y/N] "))
        answer = response.strip().lower()
        logger.debug(f"Prompt {message!r} answered {answer!r}")
        return answer in ("y", "yes")

    def confirm_action(
        self,
        message: str,
        *,
        assume_yes: bool,
        dry_run: bool,
        allow_prompt: bool,
        prompt_disabled_message: str,
    ) -> bool:
        """Confirm an action, honoring --yes, --dry-run and non-interactive mode.

        Raises:
            PromptDisabledError: if the question must be asked but prompting is off
        """
        if assume_yes or dry_run:
            return True
        if not allow_prompt:
            raise PromptDisabledError(prompt_disabled_message)
        return self.confirm(message)
