"""Target resolution and removal models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from git_worktree_remove.models.worktree import WorktreeEntry


class RemovalOutcome(Enum):
    """Final state of a removal attempt."""
    OK = "ok"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class Registered:
    """The input matched a registered worktree."""
    worktree: WorktreeEntry


@dataclass(frozen=True)
class Candidates:
    """The input matched no registered worktree; the paths must be probed on disk."""
    candidate_paths: List[str]
    resolved_input_path: str
    is_path_input: bool
    input: str


@dataclass(frozen=True)
class Ambiguous:
    """The input matched several worktrees or is not a valid name."""
    message: str


ResolvedTarget = Union[Registered, Candidates, Ambiguous]


@dataclass(frozen=True)
class ResolvedRemovalTarget:
    """A target narrowed down to exactly one path."""
    target_path: str
    registered_path: Optional[str]
    registered_worktree: Optional[WorktreeEntry]
    is_path_input: bool


@dataclass(frozen=True)
class RemovalDisplay:
    """User-facing description of a removal target."""
    status: str
    reference_info: str  # "" or e.g. "branch feature/x" / "detached HEAD @ abc1234"
    display_path: str
    target_name: str


@dataclass(frozen=True)
class RemovalContext:
    """Working state handed to the removal executor for one target."""
    status: str
    target_path: str
    target_name: str
    registered_path: Optional[str] = None
    directory_existed_initially: bool = False


@dataclass
class BatchTarget:
    """A fully resolved and safety-checked entry of a batch."""
    input: str
    target_path: str
    registered_path: Optional[str]
    registered_worktree: Optional[WorktreeEntry]
    is_path_input: bool
    directory_exists: bool
    has_dirty_changes: bool
    display: RemovalDisplay

    def to_context(self) -> RemovalContext:
        return RemovalContext(
            status=self.display.status,
            target_path=self.target_path,
            target_name=self.display.target_name,
            registered_path=self.registered_path,
            directory_existed_initially=self.directory_exists,
        )


@dataclass
class BatchResult:
    """Per-target outcomes of a batch, in input order."""
    outcomes: List[tuple] = field(default_factory=list)  # (target_name, RemovalOutcome)

    @property
    def succeeded(self) -> List[str]:
        return [name for name, outcome in self.outcomes if outcome is RemovalOutcome.OK]

    @property
    def failed(self) -> List[str]:
        return [name for name, outcome in self.outcomes if outcome is not RemovalOutcome.OK]

    @property
    def overall(self) -> RemovalOutcome:
        if len(self.outcomes) == 1:
            return self.outcomes[0][1]
        if self.failed:
            return RemovalOutcome.FAILED
        return RemovalOutcome.OK
