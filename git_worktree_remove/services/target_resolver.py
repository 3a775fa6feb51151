"""Resolve user input to exactly one worktree or directory to remove."""

import sys
from typing import Callable, Dict, List, Optional, Sequence

from git_worktree_remove.constants import BRANCH_REF_PREFIXES
from git_worktree_remove.exceptions import ResolutionError, SafetyViolation
from git_worktree_remove.models.target import (
    Ambiguous,
    Candidates,
    Registered,
    ResolvedRemovalTarget,
    ResolvedTarget,
)
from git_worktree_remove.models.worktree import WorktreeEntry
from git_worktree_remove.utils.logging import get_logger
from git_worktree_remove.utils.paths import (
    expand_home,
    get_path_module,
    has_path_separator,
    is_absolute_anywhere,
    is_case_insensitive,
    is_filesystem_root,
    is_home_shorthand,
    normalize_git_path,
    normalize_path_key,
    resolve_path,
)

logger = get_logger(__name__)


def normalize_branch_name(name: str) -> str:
    """Normalize a git branch reference to its short local name.

    Strips surrounding whitespace and the ``refs/heads/``,
    ``refs/remotes/origin/``, ``remotes/origin/`` and ``origin/`` prefixes.
    Case and internal separators are kept, so ``feature/login`` survives.

    Examples:
        >>> normalize_branch_name(" origin/feature/login ")
        'feature/login'
        >>> normalize_branch_name("refs/heads/feature/login")
        'feature/login'
    """
    normalized = name.strip()
    for prefix in BRANCH_REF_PREFIXES:
        if normalized.startswith(prefix):
            normalized = normalized[len(prefix):]
    return normalized


def looks_like_path_input(value: str) -> bool:
    """Whether the input should be treated as a filesystem path.

    Git refuses branch names that start with ".", so any leading dot means a
    path ("./wt", "../wt", ".git"). Hidden sibling directories can still be
    targeted as "../.hidden".
    """
    if not value:
        return False
    if value.startswith("."):
        return True
    if is_home_shorthand(value):
        return True
    return is_absolute_anywhere(value)


def _has_parent_segment(name: str) -> bool:
    return ".." in name.replace("\\", "/").split("/")


def _dedupe_paths(paths: Sequence[str], platform: str) -> List[str]:
    seen = set()
    unique = []
    for path in paths:
        key = normalize_path_key(path, platform)
        if key in seen:
            continue
        seen.add(key)
        unique.append(path)
    return unique


def resolve_worktree_target(
    user_input: str,
    cwd: str,
    main_path: str,
    worktrees: Sequence[WorktreeEntry],
    platform: str = sys.platform,
) -> ResolvedTarget:
    """Match raw user input against the registered worktrees.

    Precedence is: branch name, then registered path (the input as a path,
    the conventional ``<repo>-<name>`` sibling, the literal sibling), then a
    unique directory basename. When nothing matches, the paths worth probing
    on disk are returned as ``Candidates``.

    Args:
        user_input: Branch name, path or sibling directory name as typed
        cwd: Directory relative paths are resolved against
        main_path: Path of the main worktree
        worktrees: Registered worktrees, main worktree excluded
        platform: ``sys.platform`` value deciding path rules

    Returns:
        Registered, Candidates or Ambiguous
    """
    pathmod = get_path_module(platform)
    trimmed = user_input.strip()
    is_path_input = looks_like_path_input(trimmed)

    normalized_name: Optional[str] = None
    if not is_path_input:
        normalized_name = normalize_branch_name(trimmed)
        if _has_parent_segment(normalized_name):
            return Ambiguous(
                f"Invalid worktree name '{trimmed}': '..' segments are not allowed. Pass a path instead."
            )

    by_branch: Dict[str, WorktreeEntry] = {}
    by_path: Dict[str, WorktreeEntry] = {}
    for worktree in worktrees:
        by_path[normalize_path_key(worktree.path, platform)] = worktree
        if worktree.branch:
            by_branch[worktree.branch] = worktree

    if is_path_input:
        raw_path = normalize_git_path(expand_home(trimmed, platform), platform)
    else:
        raw_path = trimmed
    resolved_input_path = resolve_path(cwd, raw_path, platform)

    parent_directory = pathmod.dirname(main_path)
    main_name = pathmod.basename(main_path)

    expected_path = None
    if normalized_name:
        expected_path = pathmod.join(parent_directory, f"{main_name}-{normalized_name}")

    sibling_path = None
    if not is_path_input and not has_path_separator(trimmed):
        sibling_path = pathmod.join(parent_directory, trimmed)

    if normalized_name and normalized_name in by_branch:
        logger.debug(f"'{trimmed}' matched branch {normalized_name}")
        return Registered(by_branch[normalized_name])

    for path in (resolved_input_path, expected_path, sibling_path):
        if path is None:
            continue
        match = by_path.get(normalize_path_key(path, platform))
        if match:
            logger.debug(f"'{trimmed}' matched registered path {match.path}")
            return Registered(match)

    def fold(value: str) -> str:
        return value.lower() if is_case_insensitive(platform) else value

    basename_matches = [
        worktree for worktree in worktrees
        if fold(pathmod.basename(worktree.path)) == fold(trimmed)
    ]
    if len(basename_matches) == 1:
        logger.debug(f"'{trimmed}' matched directory name of {basename_matches[0].path}")
        return Registered(basename_matches[0])
    if len(basename_matches) > 1:
        return Ambiguous(f"Multiple worktrees match '{trimmed}'. Pass a full path instead.")

    if is_path_input:
        candidate_paths = [resolved_input_path]
    else:
        candidate_paths = _dedupe_paths(
            [path for path in (expected_path, sibling_path) if path is not None], platform
        )

    return Candidates(
        candidate_paths=candidate_paths,
        resolved_input_path=resolved_input_path,
        is_path_input=is_path_input,
        input=trimmed,
    )


def resolve_removal_target(
    user_input: str,
    cwd: str,
    main_path: str,
    worktrees: Sequence[WorktreeEntry],
    directory_exists: Callable[[str], bool],
    platform: str = sys.platform,
) -> ResolvedRemovalTarget:
    """Resolve input to a single path, probing the filesystem for unregistered candidates.

    Raises:
        ResolutionError: if the input is ambiguous or nothing exists for it
        SafetyViolation: if the target is a filesystem root
    """
    resolved = resolve_worktree_target(user_input, cwd, main_path, worktrees, platform)

    if isinstance(resolved, Ambiguous):
        raise ResolutionError(resolved.message)

    registered_worktree = None
    registered_path = None
    if isinstance(resolved, Registered):
        registered_worktree = resolved.worktree
        registered_path = resolved.worktree.path
        target_path = resolved.worktree.path
        is_path_input = looks_like_path_input(user_input.strip())
    else:
        is_path_input = resolved.is_path_input
        existing = [path for path in resolved.candidate_paths if directory_exists(path)]

        if not existing:
            if resolved.is_path_input:
                raise ResolutionError(f"No worktree or directory found at '{resolved.resolved_input_path}'.")
            raise ResolutionError(f"No worktree or directory found for '{resolved.input}'.")

        if len(existing) > 1:
            raise ResolutionError(
                f"Multiple directories exist for '{resolved.input}': '{existing[0]}' and "
                f"'{existing[1]}'. Pass a full path instead."
            )

        target_path = existing[0]

    target_path = get_path_module(platform).normpath(target_path)
    if is_filesystem_root(target_path, platform):
        raise SafetyViolation("Refusing to remove a filesystem root directory.")

    return ResolvedRemovalTarget(
        target_path=target_path,
        registered_path=registered_path,
        registered_worktree=registered_worktree,
        is_path_input=is_path_input,
    )
