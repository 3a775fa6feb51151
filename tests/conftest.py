"""Pytest fixtures for git-worktree-remove tests"""
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional
from unittest.mock import Mock

import git
import pytest

from git_worktree_remove.config import Config
from git_worktree_remove.models.worktree import WorktreeEntry, WorktreeList
from git_worktree_remove.services.filesystem import FilesystemService
from git_worktree_remove.services.git import WorktreeService
from git_worktree_remove.services.output import OutputWriter
from git_worktree_remove.services.prompt import Prompter


MAIN_PATH = "/work/repo"
FEATURE_PATH = "/work/repo-feature"
BUGFIX_PATH = "/work/repo-bugfix"
DETACHED_PATH = "/work/scratch"


class TrashDirFilesystem(FilesystemService):
    """Filesystem service that moves "trashed" directories into a local folder."""

    def __init__(self, trash_dir: Path):
        self.trash_dir = trash_dir
        self.trash_dir.mkdir(parents=True, exist_ok=True)

    def move_to_trash(self, path: str) -> tuple[bool, Optional[str]]:
        destination = self.trash_dir / Path(path).name
        shutil.move(path, str(destination))
        return True, None


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve so paths match what git reports (e.g. /private/var on macOS)
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_worktrees(git_repo, temp_dir):
    """Create a repository with a branch worktree and a detached worktree beside it."""
    git_repo.git.worktree("add", "-b", "feature/login", str(temp_dir / "repo-feature-login"))
    git_repo.git.worktree("add", "--detach", str(temp_dir / "scratch"))
    yield git_repo


@pytest.fixture
def trash_filesystem(temp_dir):
    """Filesystem service with a local trash folder instead of the system trash."""
    return TrashDirFilesystem(temp_dir / "trash")


@pytest.fixture
def worktree_list():
    """Worktree snapshot with two branch worktrees and one detached worktree."""
    return WorktreeList(
        main_path=MAIN_PATH,
        worktrees=[
            WorktreeEntry(path=FEATURE_PATH, head="1111111aaaaaaa", branch="feature"),
            WorktreeEntry(path=BUGFIX_PATH, head="2222222bbbbbbb", branch="bugfix/crash"),
            WorktreeEntry(path=DETACHED_PATH, head="3333333ccccccc", is_detached=True),
        ],
    )


@pytest.fixture
def existing_dirs():
    """Set of directories the mock filesystem reports as existing."""
    return {MAIN_PATH, FEATURE_PATH, BUGFIX_PATH, DETACHED_PATH}


@pytest.fixture
def mock_filesystem(existing_dirs):
    """Mock filesystem backed by ``existing_dirs``; trash moves delete the entry."""
    filesystem = Mock(spec=FilesystemService)
    filesystem.directory_exists.side_effect = lambda path: path in existing_dirs

    def move_to_trash(path):
        existing_dirs.discard(path)
        return True, None

    filesystem.move_to_trash.side_effect = move_to_trash
    filesystem.get_current_directory.return_value = MAIN_PATH
    return filesystem


@pytest.fixture
def mock_worktree_service(worktree_list):
    """Mock git collaborator returning ``worktree_list``."""
    service = Mock(spec=WorktreeService)
    service.get_worktree_list.return_value = worktree_list
    service.has_uncommitted_changes.return_value = False
    service.remove_worktree.return_value = (True, None)
    return service


@pytest.fixture
def mock_output():
    return Mock(spec=OutputWriter)


@pytest.fixture
def mock_prompter():
    """Prompter mock answering yes, honoring --yes/--dry-run like the real one."""
    prompter = Mock(spec=Prompter)
    prompter.confirm.return_value = True

    def confirm_action(message, *, assume_yes, dry_run, allow_prompt, prompt_disabled_message):
        if assume_yes or dry_run:
            return True
        return prompter.confirm(message)

    prompter.confirm_action.side_effect = confirm_action
    return prompter


@pytest.fixture
def config():
    """Interactive configuration without --yes or --force."""
    return Config(allow_prompt=True)


@pytest.fixture
def output_messages(mock_output):
    """Return a helper listing the messages written to one level of the mocked output."""
    def _messages(level):
        return [call.args[0] for call in getattr(mock_output, level).call_args_list]
    return _messages


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    root_logger.handlers = handlers
    root_logger.setLevel(level)
