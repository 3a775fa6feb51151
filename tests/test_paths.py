"""Tests for platform-aware path helpers"""
import pytest

from git_worktree_remove.utils.paths import (
    expand_home,
    is_filesystem_root,
    is_path_equal_or_within,
    is_path_strictly_within,
    normalize_git_path,
    normalize_path_key,
    paths_equal,
    resolve_path,
)


class TestResolvePath:
    """Test lexical path resolution."""

    def test_relative_path_resolved_against_base(self):
        assert resolve_path("/work/repo", "../repo-feature", "linux") == "/work/repo-feature"

    def test_absolute_path_ignores_base(self):
        assert resolve_path("/work/repo", "/elsewhere/wt", "linux") == "/elsewhere/wt"

    def test_windows_paths_on_any_host(self):
        assert resolve_path("C:\\src\\repo", "..\\wt", "win32") == "C:\\src\\wt"


class TestNormalizePathKey:
    """Test path comparison keys."""

    def test_posix_keys_are_case_sensitive(self):
        assert normalize_path_key("/Work/Repo", "linux") != normalize_path_key("/work/repo", "linux")

    def test_windows_keys_are_case_insensitive(self):
        assert normalize_path_key("C:\\Src\\Repo", "win32") == normalize_path_key("c:\\src\\repo", "win32")

    def test_trailing_separator_ignored(self):
        assert paths_equal("/work/repo/", "/work/repo", "linux")


class TestNormalizeGitPath:
    """Test conversion of cygwin/msys drive notation."""

    def test_msys_drive_path(self):
        assert normalize_git_path("/c/src/repo", "win32") == "C:\\src\\repo"

    def test_cygwin_drive_path(self):
        assert normalize_git_path("/cygdrive/d/work/wt", "win32") == "D:\\work\\wt"

    def test_bare_drive(self):
        assert normalize_git_path("/c", "win32") == "C:\\"

    def test_native_windows_path_unchanged(self):
        assert normalize_git_path("C:\\src\\repo", "win32") == "C:\\src\\repo"

    def test_other_platforms_unchanged(self):
        assert normalize_git_path("/c/src/repo", "linux") == "/c/src/repo"


class TestExpandHome:
    """Test home directory expansion."""

    def test_expands_tilde_slash(self, monkeypatch, temp_dir):
        monkeypatch.setenv("HOME", str(temp_dir))
        assert expand_home("~/wt", "linux") == f"{temp_dir}/wt"

    def test_expands_bare_tilde(self, monkeypatch, temp_dir):
        monkeypatch.setenv("HOME", str(temp_dir))
        assert expand_home("~", "linux") == str(temp_dir)

    def test_leaves_other_input_alone(self):
        assert expand_home("~user/wt", "linux") == "~user/wt"
        assert expand_home("feature", "linux") == "feature"


class TestContainment:
    """Test containment checks based on relative paths."""

    @pytest.mark.parametrize(
        "base, candidate, expected",
        [
            ("/work/repo", "/work/repo/src", True),
            ("/work/repo", "/work/repo", False),
            ("/work/repo", "/work/repo-other", False),
            ("/work/repo", "/work", False),
            ("/work/repo", "relative/path", False),
        ],
    )
    def test_strictly_within_posix(self, base, candidate, expected):
        assert is_path_strictly_within(base, candidate, "linux") is expected

    def test_equal_counts_for_equal_or_within(self):
        assert is_path_equal_or_within("/work/repo", "/work/repo", "linux") is True

    def test_windows_containment_ignores_case(self):
        assert is_path_strictly_within("C:\\Src\\Repo", "c:\\src\\repo\\.git", "win32") is True

    def test_windows_different_drives(self):
        assert is_path_equal_or_within("C:\\src", "D:\\src\\wt", "win32") is False


class TestFilesystemRoot:
    """Test filesystem root detection."""

    def test_posix_root(self):
        assert is_filesystem_root("/", "linux") is True
        assert is_filesystem_root("/work", "linux") is False

    def test_windows_drive_root(self):
        assert is_filesystem_root("C:\\", "win32") is True
        assert is_filesystem_root("C:\\src", "win32") is False
