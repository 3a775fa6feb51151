"""Utility functions for git-worktree-remove.

This package provides utility modules:
- logging: Logging configuration and logger creation
- paths: Platform-aware path resolution and containment checks
"""

from .logging import setup_logging, get_logger, ColoredFormatter
from .paths import (
    get_path_module,
    resolve_path,
    normalize_path_key,
    normalize_git_path,
    paths_equal,
    is_path_equal_or_within,
    is_path_strictly_within,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
    # Paths
    "get_path_module",
    "resolve_path",
    "normalize_path_key",
    "normalize_git_path",
    "paths_equal",
    "is_path_equal_or_within",
    "is_path_strictly_within",
]
