"""Tests for logging setup"""
import logging

import pytest

from git_worktree_remove.utils.logging import get_logger, setup_logging


class TestLogging:

    def test_get_logger_strips_package_prefix(self):
        assert get_logger("git_worktree_remove.services.removal_executor").name == "removal_executor"
        assert get_logger("git_worktree_remove.core.worktree_remover").name == "core.worktree_remover"

    @pytest.mark.parametrize("verbose, level", [(False, logging.WARNING), (True, logging.INFO)])
    def test_levels(self, restore_root_logger, verbose, level):
        setup_logging(verbose=verbose)

        assert restore_root_logger.level == level
        assert len(restore_root_logger.handlers) == 1

    def test_debug_writes_log_file(self, restore_root_logger, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))

        setup_logging(debug=True)

        assert restore_root_logger.level == logging.DEBUG
        assert (temp_dir / ".git-worktree-remove" / "git-worktree-remove.log").exists()
        for handler in restore_root_logger.handlers:
            handler.close()

    def test_quiet_shows_only_errors(self, restore_root_logger):
        setup_logging(quiet=True)

        assert restore_root_logger.level == logging.ERROR
        assert restore_root_logger.handlers[0].level == logging.ERROR

    def test_debug_wins_over_quiet(self, restore_root_logger, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))

        setup_logging(debug=True, quiet=True)

        assert restore_root_logger.level == logging.DEBUG
        for handler in restore_root_logger.handlers:
            handler.close()
