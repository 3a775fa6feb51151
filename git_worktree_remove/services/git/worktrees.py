"""Worktree operations service for git-worktree-remove."""

import os
import sys
from typing import List, Optional

import git

from git_worktree_remove.constants import GIT_ALREADY_GONE_MARKERS, GIT_NEEDS_FORCE_MARKERS
from git_worktree_remove.exceptions import GitOperationError
from git_worktree_remove.models.worktree import WorktreeEntry, WorktreeList
from git_worktree_remove.services.target_resolver import normalize_branch_name
from git_worktree_remove.utils.logging import get_logger
from git_worktree_remove.utils.paths import normalize_git_path

logger = get_logger(__name__)


def _describe_git_error(command: str, error: git.exc.GitCommandError) -> str:
    """Build a one-line description of a failed git command."""
    stderr = (error.stderr if hasattr(error, "stderr") and error.stderr else str(error)).strip()
    status = error.status if hasattr(error, "status") else "unknown"

    if stderr:
        return f"{command} failed (exit {status}): {stderr}"
    return f"{command} failed with exit code {status}"


def parse_worktree_list(output: str) -> List[WorktreeEntry]:
    """Parse ``git worktree list --porcelain`` output.

    Accepts both the newline-separated form and the ``-z`` form, where each
    attribute line is NUL-terminated.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached")
        (blank line between worktrees)
    """
    entries: List[WorktreeEntry] = []
    current: Optional[dict] = None

    for line in output.replace("\0", "\n").split("\n"):
        if line.startswith("worktree "):
            if current is not None:
                entries.append(WorktreeEntry(**current))
            current = {
                "path": line[len("worktree "):].strip(),
                "head": None,
                "branch": None,
                "is_detached": False,
            }
            continue

        if current is None:
            continue

        if line.startswith("HEAD "):
            current["head"] = line[len("HEAD "):].strip() or None
        elif line.startswith("branch "):
            raw_branch = line[len("branch "):].strip()
            current["branch"] = normalize_branch_name(raw_branch) if raw_branch else None
        elif line.strip() == "detached":
            current["is_detached"] = True
            current["branch"] = None

    if current is not None:
        entries.append(WorktreeEntry(**current))

    return entries


class WorktreeService:
    """Service for the git side of worktree removal."""

    def __init__(self, repo_path: str, platform: str = sys.platform):
        """Initialize the worktree service.

        Args:
            repo_path: Any path inside the repository or one of its worktrees
            platform: Platform used to normalize paths reported by git
        """
        self.repo_path = repo_path
        self.platform = platform

    def _get_repo(self, path: Optional[str] = None):
        """Get a git.Repo instance.

        Creates a new repo instance for each call so worker threads never
        share one.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(path or self.repo_path, search_parent_directories=True)

    def get_worktree_list(self) -> WorktreeList:
        """List every worktree of the repository, main worktree first.

        Returns:
            WorktreeList with the main path split out

        Raises:
            GitOperationError: if git cannot list worktrees
        """
        try:
            repo = self._get_repo()
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise GitOperationError("worktree list", self.repo_path, f"Not a git repository: {e}")

        try:
            output = repo.git.worktree("list", "--porcelain", "-z")
        except git.exc.GitCommandError as e:
            # git < 2.36 has no -z for worktree list
            logger.debug(f"Falling back to newline-separated worktree list: {e}")
            try:
                output = repo.git.worktree("list", "--porcelain")
            except git.exc.GitCommandError as fallback_error:
                raise GitOperationError(
                    "worktree list", self.repo_path, _describe_git_error("git worktree list", fallback_error)
                )

        entries = parse_worktree_list(output)
        if not entries:
            raise GitOperationError(
                "worktree list", self.repo_path, "Unable to determine main worktree from git worktree list"
            )

        entries = [
            WorktreeEntry(
                path=normalize_git_path(entry.path, self.platform),
                head=entry.head,
                branch=entry.branch,
                is_detached=entry.is_detached,
            )
            for entry in entries
        ]

        logger.debug(f"Found {len(entries)} worktrees")
        for entry in entries:
            logger.debug(f"  {entry}")

        return WorktreeList(main_path=entries[0].path, worktrees=entries[1:])

    def has_uncommitted_changes(self, worktree_path: str) -> bool:
        """Check whether a worktree has uncommitted changes (untracked files included).

        A worktree whose status cannot be read is reported clean.
        """
        if not os.path.exists(worktree_path):
            logger.debug(f"Worktree path {worktree_path} doesn't exist (orphaned)")
            return False

        try:
            repo = self._get_repo()
            status = repo.git.execute(["git", "-C", worktree_path, "status", "--porcelain"])
            return bool(status.strip())
        except git.exc.GitCommandError as e:
            logger.debug(
                f"Could not check worktree status for {worktree_path}: "
                f"{_describe_git_error('git status in worktree', e)}"
            )
            return False

    def remove_worktree(self, main_path: str, worktree_path: str, force: bool = False) -> tuple[bool, Optional[str]]:
        """Unregister a worktree from git.

        Runs ``git worktree remove`` without ``--force`` first. When git
        refuses because the worktree is dirty, the forced variant is used only
        if ``force`` is set. When git reports the worktree is already gone,
        stale administrative entries are pruned instead. Git may delete the
        directory if it still exists.

        Args:
            main_path: Path of the main worktree, git runs from there
            worktree_path: Registered path of the worktree
            force: Allow ``git worktree remove --force``

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        try:
            repo = self._get_repo(main_path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            error_msg = f"Cannot open main worktree {main_path}: {e}"
            logger.debug(error_msg)
            return False, error_msg

        try:
            repo.git.worktree("remove", worktree_path)
            logger.debug(f"Removed worktree at {worktree_path}")
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = _describe_git_error("git worktree remove", e)
            stderr = str(e.stderr or "")

        if any(marker in stderr for marker in GIT_NEEDS_FORCE_MARKERS):
            if not force:
                logger.debug(f"Worktree {worktree_path} is dirty and force was not requested")
                return False, error_msg
            try:
                repo.git.worktree("remove", "--force", worktree_path)
                logger.debug(f"Force-removed worktree at {worktree_path}")
                return True, None
            except git.exc.GitCommandError as e:
                error_msg = _describe_git_error("git worktree remove --force", e)
                logger.debug(f"Failed to remove worktree at {worktree_path}: {error_msg}")
                return False, error_msg

        if any(marker in stderr for marker in GIT_ALREADY_GONE_MARKERS):
            logger.debug(f"Worktree {worktree_path} already gone, pruning metadata instead")
            return self.prune_worktrees(main_path)

        logger.debug(f"Failed to remove worktree at {worktree_path}: {error_msg}")
        return False, error_msg

    def prune_worktrees(self, main_path: Optional[str] = None) -> tuple[bool, Optional[str]]:
        """Prune orphaned worktree metadata.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        try:
            repo = self._get_repo(main_path)
            repo.git.worktree("prune")
            logger.debug("Pruned orphaned worktree metadata")
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = _describe_git_error("git worktree prune", e)
            logger.debug(f"Failed to prune worktrees: {error_msg}")
            return False, error_msg
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            error_msg = f"Cannot open repository to prune worktrees: {e}"
            logger.debug(error_msg)
            return False, error_msg
