"""Filesystem service for git-worktree-remove"""

import os
from typing import Optional

from send2trash import send2trash
from send2trash.exceptions import TrashPermissionError

from git_worktree_remove.utils.logging import get_logger

logger = get_logger(__name__)


class FilesystemService:
    """Existence checks, trash moves and the process working directory."""

    def directory_exists(self, path: str) -> bool:
        """Return True if ``path`` is an existing directory."""
        return os.path.isdir(path)

    def move_to_trash(self, path: str) -> tuple[bool, Optional[str]]:
        """Move a directory to the system trash.

        Returns:
            Tuple of (success, error_message). error_message is None on success
            and is only the cause otherwise; callers name the target.
        """
        try:
            send2trash(path)
            logger.debug(f"Moved {path} to trash")
            return True, None
        except TrashPermissionError as e:
            error_msg = f"permission denied ({e})"
        except OSError as e:
            error_msg = str(e)

        logger.debug(f"Trash move failed for {path}: {error_msg}")
        return False, error_msg

    def change_directory(self, path: str) -> None:
        """Change the working directory of this process.

        Raises:
            OSError: if the directory cannot be entered
        """
        logger.debug(f"Changing process working directory to {path}")
        os.chdir(path)

    def get_current_directory(self) -> str:
        return os.getcwd()
