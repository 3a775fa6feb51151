"""Shared constants for git-worktree-remove."""

# Prefixes stripped from branch-like input, applied in this order
BRANCH_REF_PREFIXES = (
    "refs/heads/",
    "refs/remotes/origin/",
    "remotes/origin/",
    "origin/",
)


class RemovalStatus:
    """User-facing wording for the kind of target being removed."""

    REGISTERED = "registered worktree"
    ORPHANED = "orphaned directory"  # name-like input, unregistered directory
    UNREGISTERED = "unregistered directory"  # path-like input, unregistered directory


# Removal attempts allowed in flight at once during a batch
BATCH_CONCURRENCY = 4

# Length of an abbreviated commit sha in confirmation messages
SHORT_SHA_LENGTH = 7

# git stderr fragments recognized by the deregister step
GIT_NEEDS_FORCE_MARKERS = ("use --force to delete it",)
GIT_ALREADY_GONE_MARKERS = (
    "is not a working tree",
    "No such file or directory",
    "does not exist",
)

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
