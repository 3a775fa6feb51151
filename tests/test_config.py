"""Tests for Config"""
import pytest

from git_worktree_remove.config import Config
from git_worktree_remove.constants import BATCH_CONCURRENCY


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.dry_run is False
        assert config.assume_yes is False
        assert config.force is False
        assert config.allow_prompt is True
        assert config.max_workers == BATCH_CONCURRENCY == 4

    def test_invalid_max_workers(self):
        with pytest.raises(ValueError, match="max_workers must be positive"):
            Config(max_workers=0)

    def test_quiet_and_verbose_conflict(self):
        with pytest.raises(ValueError, match="quiet and verbose"):
            Config(quiet=True, verbose=True)

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"force": True, "max_workers": 2, "colour": "always"})
        assert config.force is True
        assert config.max_workers == 2

    def test_round_trip_through_dict(self):
        config = Config(dry_run=True, quiet=True)
        assert Config.from_dict(config.to_dict()) == config

    def test_get(self):
        config = Config(assume_yes=True)
        assert config.get("assume_yes") is True
        assert config.get("missing", "fallback") == "fallback"
