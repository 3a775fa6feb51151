"""Configuration handling for git-worktree-remove"""

from dataclasses import dataclass

from git_worktree_remove.constants import BATCH_CONCURRENCY


@dataclass
class Config:
    """Options shared by every removal in one invocation."""

    # Execution modes
    dry_run: bool = False  # Announce every mutation instead of performing it
    assume_yes: bool = False  # Answer yes to every confirmation
    force: bool = False  # Approve escalation and force-unregister dirty worktrees
    allow_prompt: bool = True  # False when stdin is not interactive

    # Output
    verbose: bool = False
    quiet: bool = False
    debug: bool = False

    # Batch execution
    max_workers: int = BATCH_CONCURRENCY

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_max_workers()
        self._validate_output_flags()

    def _validate_max_workers(self):
        """Validate max_workers is positive."""
        if self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")

    def _validate_output_flags(self):
        """Validate that quiet and verbose are not combined."""
        if self.quiet and self.verbose:
            raise ValueError("quiet and verbose cannot both be enabled")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "dry_run": self.dry_run,
            "assume_yes": self.assume_yes,
            "force": self.force,
            "allow_prompt": self.allow_prompt,
            "verbose": self.verbose,
            "quiet": self.quiet,
            "debug": self.debug,
            "max_workers": self.max_workers,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {
            "dry_run",
            "assume_yes",
            "force",
            "allow_prompt",
            "verbose",
            "quiet",
            "debug",
            "max_workers",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
