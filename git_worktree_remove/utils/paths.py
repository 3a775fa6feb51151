"""Platform-aware path helpers.

Every helper takes a ``platform`` argument (a ``sys.platform`` value) so that
Windows rules can be exercised from any host. Resolution is lexical: symlinks
are never followed, matching how git reports worktree paths.
"""

import ntpath
import os
import posixpath
import re
import sys
from types import ModuleType

_CYGWIN_DRIVE = re.compile(r"^/cygdrive/([a-zA-Z])(?:/(.*))?$")
_MSYS_DRIVE = re.compile(r"^/([a-zA-Z])(?:/(.*))?$")


def get_path_module(platform: str = sys.platform) -> ModuleType:
    """Return the path module (``ntpath`` or ``posixpath``) for a platform."""
    return ntpath if platform == "win32" else posixpath


def is_case_insensitive(platform: str = sys.platform) -> bool:
    """Whether paths on the platform compare case-insensitively."""
    return platform == "win32"


def resolve_path(base: str, path: str, platform: str = sys.platform) -> str:
    """Resolve ``path`` against ``base`` into a normalized absolute path."""
    pathmod = get_path_module(platform)
    return pathmod.normpath(pathmod.join(base, path))


def normalize_path_key(path: str, platform: str = sys.platform) -> str:
    """Return a key under which equal paths compare equal on the platform."""
    resolved = resolve_path(os.getcwd(), path, platform)
    if is_case_insensitive(platform):
        return resolved.lower()
    return resolved


def paths_equal(first: str, second: str, platform: str = sys.platform) -> bool:
    return normalize_path_key(first, platform) == normalize_path_key(second, platform)


def normalize_git_path(git_path: str, platform: str = sys.platform) -> str:
    """Convert cygwin/msys drive notation reported by git into a native Windows path.

    ``/cygdrive/c/src/repo`` and ``/c/src/repo`` both become ``C:\\src\\repo``.
    Other platforms get the path back unchanged.
    """
    if platform != "win32":
        return git_path

    trimmed = git_path.strip()
    match = _CYGWIN_DRIVE.match(trimmed) or _MSYS_DRIVE.match(trimmed)
    if not match:
        return trimmed

    drive_letter, rest = match.group(1), match.group(2) or ""
    native_rest = rest.replace("/", "\\")
    return f"{drive_letter.upper()}:\\{native_rest}"


def is_home_shorthand(path: str) -> bool:
    return path == "~" or path.startswith("~/") or path.startswith("~\\")


def expand_home(path: str, platform: str = sys.platform) -> str:
    """Expand a leading ``~`` into the current user's home directory."""
    if not is_home_shorthand(path):
        return path
    home = os.path.expanduser("~")
    if path == "~":
        return home
    return get_path_module(platform).join(home, path[2:])


def has_path_separator(value: str) -> bool:
    return "/" in value or "\\" in value


def is_absolute_anywhere(path: str) -> bool:
    """Whether the path is absolute under either POSIX or Windows rules."""
    return posixpath.isabs(path) or ntpath.isabs(path)


def is_filesystem_root(path: str, platform: str = sys.platform) -> bool:
    pathmod = get_path_module(platform)
    normalized = pathmod.normpath(path)
    return pathmod.dirname(normalized) == normalized


def _is_within(base_path: str, candidate_path: str, platform: str, include_equal: bool) -> bool:
    pathmod = get_path_module(platform)
    # Only meaningful for absolute paths; relative input would be resolved
    # against the host cwd, which may use a different path flavor.
    if not pathmod.isabs(base_path) or not pathmod.isabs(candidate_path):
        return False

    try:
        relative = pathmod.relpath(pathmod.normpath(candidate_path), pathmod.normpath(base_path))
    except ValueError:
        # Different drives
        return False

    if relative == pathmod.curdir:
        return include_equal
    if pathmod.isabs(relative):
        return False
    if relative == pathmod.pardir or relative.startswith(pathmod.pardir + pathmod.sep):
        return False
    return True


def is_path_equal_or_within(base_path: str, candidate_path: str, platform: str = sys.platform) -> bool:
    """Whether ``candidate_path`` is ``base_path`` or lies somewhere below it."""
    return _is_within(base_path, candidate_path, platform, include_equal=True)


def is_path_strictly_within(base_path: str, candidate_path: str, platform: str = sys.platform) -> bool:
    """Whether ``candidate_path`` lies below ``base_path`` (equality excluded)."""
    return _is_within(base_path, candidate_path, platform, include_equal=False)
