"""Safety checks run before anything is removed."""

import sys
from typing import Optional

from git_worktree_remove.exceptions import SafetyViolation
from git_worktree_remove.utils.paths import is_path_strictly_within, paths_equal


def assert_removal_safe(
    target_path: str,
    main_path: str,
    registered_path: Optional[str],
    platform: str = sys.platform,
) -> None:
    """Refuse removals that could destroy the main worktree.

    Checks, in order:
        1. the target is the main worktree
        2. the target contains the main worktree
        3. the target is unregistered and lives inside the main worktree
           (e.g. ``.git`` or any other directory of the main checkout)

    A registered worktree nested inside the main worktree is allowed.

    Raises:
        SafetyViolation: on the first failed check; --force never overrides it
    """
    if paths_equal(target_path, main_path, platform):
        raise SafetyViolation("Refusing to remove the main worktree.")

    if is_path_strictly_within(target_path, main_path, platform):
        raise SafetyViolation("Refusing to remove a directory containing the main worktree.")

    if registered_path is None and is_path_strictly_within(main_path, target_path, platform):
        raise SafetyViolation("Refusing to remove an unregistered directory inside the main worktree.")
