"""End-to-end removal against real repositories"""
import os
import shutil

import pytest

from git_worktree_remove.config import Config
from git_worktree_remove.core import WorktreeRemover
from git_worktree_remove.exceptions import ResolutionError, SafetyViolation
from git_worktree_remove.models.target import RemovalOutcome
from git_worktree_remove.services.git import WorktreeService

from conftest import TrashDirFilesystem


class FailingTrashFilesystem(TrashDirFilesystem):
    """Filesystem service whose trash is never available."""

    def move_to_trash(self, path):
        return False, "Trash is not available"


def registered_paths(repo_path):
    return [wt.path for wt in WorktreeService(repo_path).get_worktree_list().worktrees]


@pytest.fixture
def repo_path(git_repo_with_worktrees, monkeypatch):
    path = git_repo_with_worktrees.working_dir
    monkeypatch.chdir(path)
    return path


class TestRemoveRegisteredWorktree:
    """Test removing registered worktrees end to end."""

    def test_remove_by_branch_name(self, repo_path, temp_dir, trash_filesystem):
        worktree_path = temp_dir / "repo-feature-login"
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        outcome = remover.remove("feature/login")

        assert outcome is RemovalOutcome.OK
        assert not worktree_path.exists()
        assert (temp_dir / "trash" / "repo-feature-login" / "README.md").exists()
        assert str(worktree_path) not in registered_paths(repo_path)

    def test_remove_several(self, repo_path, temp_dir, trash_filesystem):
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        outcome = remover.remove_batch(["feature/login", "scratch"])

        assert outcome is RemovalOutcome.OK
        assert registered_paths(repo_path) == []

    def test_dirty_worktree_without_trash_needs_force(self, repo_path, temp_dir):
        worktree_path = temp_dir / "repo-feature-login"
        (worktree_path / "notes.txt").write_text("wip\n")
        filesystem = FailingTrashFilesystem(temp_dir / "trash")
        remover = WorktreeRemover(repo_path, Config(assume_yes=True, force=True), filesystem=filesystem)

        outcome = remover.remove("feature/login")

        assert outcome is RemovalOutcome.OK
        assert not worktree_path.exists()
        assert str(worktree_path) not in registered_paths(repo_path)

    def test_dry_run_changes_nothing(self, repo_path, temp_dir, trash_filesystem):
        remover = WorktreeRemover(repo_path, Config(dry_run=True), filesystem=trash_filesystem)

        outcome = remover.remove_batch(["feature/login", "scratch"])

        assert outcome is RemovalOutcome.OK
        assert (temp_dir / "repo-feature-login").exists()
        assert len(registered_paths(repo_path)) == 2

    def test_run_from_inside_target_switches_to_main(self, repo_path, temp_dir, trash_filesystem, monkeypatch):
        monkeypatch.chdir(temp_dir / "repo-feature-login")
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        outcome = remover.remove("feature/login")

        assert outcome is RemovalOutcome.OK
        assert os.getcwd() == repo_path

    def test_rerun_after_manual_delete_prunes_registration(self, repo_path, temp_dir, trash_filesystem):
        shutil.rmtree(temp_dir / "scratch")
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        outcome = remover.remove("scratch")

        assert outcome is RemovalOutcome.OK
        assert str(temp_dir / "scratch") not in registered_paths(repo_path)


class TestRemoveUnregisteredDirectory:
    """Test removing directories git does not know about."""

    def test_orphaned_sibling_by_name(self, repo_path, temp_dir, trash_filesystem):
        orphan = temp_dir / "repo-leftover"
        orphan.mkdir()
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        outcome = remover.remove("leftover")

        assert outcome is RemovalOutcome.OK
        assert not orphan.exists()
        assert (temp_dir / "trash" / "repo-leftover").exists()

    def test_unknown_name_is_an_error(self, repo_path, trash_filesystem):
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        with pytest.raises(ResolutionError, match="No worktree or directory found for 'nothing-here'"):
            remover.remove("nothing-here")


class TestRefusals:
    """Dangerous targets are refused before anything is touched."""

    def test_refuses_main_worktree(self, repo_path, trash_filesystem):
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        with pytest.raises(SafetyViolation, match="main worktree"):
            remover.remove(".")

        assert os.path.isdir(repo_path)

    def test_refuses_git_directory(self, repo_path, trash_filesystem):
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        with pytest.raises(SafetyViolation, match="inside the main worktree"):
            remover.remove("./.git")

        assert os.path.isdir(os.path.join(repo_path, ".git"))

    def test_refuses_parent_directory(self, repo_path, temp_dir, trash_filesystem):
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        with pytest.raises(SafetyViolation, match="containing the main worktree"):
            remover.remove(str(temp_dir))

    def test_refusal_aborts_whole_batch(self, repo_path, temp_dir, trash_filesystem):
        remover = WorktreeRemover(repo_path, Config(assume_yes=True), filesystem=trash_filesystem)

        with pytest.raises(SafetyViolation):
            remover.remove_batch(["feature/login", "."])

        assert (temp_dir / "repo-feature-login").exists()
