"""Core functionality for git-worktree-remove"""

import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence, Union

from git_worktree_remove.config import Config
from git_worktree_remove.exceptions import ResolutionError, WorktreeRemoveError
from git_worktree_remove.formatters import (
    format_batch_confirmation,
    format_dirty_confirmation,
    format_dirty_summary,
    get_removal_display,
)
from git_worktree_remove.models.target import BatchResult, BatchTarget, RemovalOutcome
from git_worktree_remove.models.worktree import WorktreeList
from git_worktree_remove.services.filesystem import FilesystemService
from git_worktree_remove.services.git import WorktreeService
from git_worktree_remove.services.output import OutputWriter
from git_worktree_remove.services.prompt import Prompter
from git_worktree_remove.services.removal_executor import RemovalExecutor
from git_worktree_remove.services.safety import assert_removal_safe
from git_worktree_remove.services.target_resolver import resolve_removal_target
from git_worktree_remove.utils.logging import get_logger
from git_worktree_remove.utils.paths import is_path_equal_or_within, normalize_path_key, paths_equal

logger = get_logger(__name__)


class WorktreeRemover:
    """Removes one or more worktrees with a single shared confirmation.

    A run goes through these phases, and nothing is mutated before the last:
        1. resolve every target in input order; any error aborts the run
        2. one combined prompt for targets with uncommitted changes
        3. one combined confirmation listing every target
        4. move this process out of a target it is running inside
        5. remove all targets with a bounded worker pool
    """

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict],
        output: Optional[OutputWriter] = None,
        worktree_service: Optional[WorktreeService] = None,
        filesystem: Optional[FilesystemService] = None,
        prompter: Optional[Prompter] = None,
        platform: str = sys.platform,
    ):
        """Initialize WorktreeRemover.

        Args:
            repo_path: Any path inside the repository
            config: Configuration dict or Config object
            output: Output sink, defaults to a rich-backed OutputWriter
            worktree_service: Git collaborator
            filesystem: Filesystem collaborator
            prompter: Terminal prompt collaborator
            platform: ``sys.platform`` value deciding path rules
        """
        self.repo_path = repo_path
        self.config = config if isinstance(config, Config) else Config.from_dict(config)
        self.platform = platform

        self.output = output or OutputWriter(
            verbose=self.config.verbose, quiet=self.config.quiet, dry_run=self.config.dry_run
        )
        self.worktree_service = worktree_service or WorktreeService(repo_path, platform)
        self.filesystem = filesystem or FilesystemService()
        self.prompter = prompter or Prompter()
        self.executor = RemovalExecutor(self.worktree_service, self.filesystem, self.output, self.prompter)

    def remove(self, target: str) -> RemovalOutcome:
        """Remove a single worktree or directory.

        Raises:
            ResolutionError: if the target is blank, ambiguous or not found
            SafetyViolation: if removing the target could damage the main worktree
        """
        if not target.strip():
            raise ResolutionError("No branch or path specified.")
        return self.remove_batch([target])

    def remove_batch(self, targets: Sequence[str]) -> RemovalOutcome:
        """Remove several worktrees after one combined confirmation.

        With a single target the result is that target's own outcome. With
        several, the result is FAILED as soon as any target was not removed.

        Raises:
            ResolutionError: if any target is ambiguous or not found, or all are blank
            SafetyViolation: if removing any target could damage the main worktree
            PromptDisabledError: if a confirmation is needed but prompting is off
        """
        worktree_list = self.worktree_service.get_worktree_list()
        main_path = worktree_list.main_path
        invocation_cwd = self.filesystem.get_current_directory()

        resolved = self.resolve_batch_targets(targets, invocation_cwd, worktree_list)
        if not resolved:
            raise ResolutionError("No branch or path specified.")

        if not self._confirm_dirty_targets(resolved):
            return RemovalOutcome.CANCELLED

        switch_to_main = self.prepare_cwd_switch(resolved, invocation_cwd, main_path)

        if not self._confirm_removal(resolved):
            return RemovalOutcome.CANCELLED

        if switch_to_main:
            switch_to_main()

        result = self._execute_all(resolved, main_path)
        return self._report(result)

    def resolve_batch_targets(
        self, targets: Sequence[str], cwd: str, worktree_list: WorktreeList
    ) -> List[BatchTarget]:
        """Resolve and safety-check every target, in input order.

        Blank inputs are skipped. Inputs resolving to an already listed path
        are dropped so no two removals ever touch the same directory.
        """
        main_path = worktree_list.main_path
        resolved: List[BatchTarget] = []
        seen: Dict[str, str] = {}

        for raw_target in targets:
            trimmed = raw_target.strip()
            if not trimmed:
                continue

            target = resolve_removal_target(
                trimmed,
                cwd,
                main_path,
                worktree_list.worktrees,
                self.filesystem.directory_exists,
                self.platform,
            )
            assert_removal_safe(target.target_path, main_path, target.registered_path, self.platform)

            key = normalize_path_key(target.target_path, self.platform)
            if key in seen:
                self.output.info(f"'{trimmed}' is the same target as '{seen[key]}'; skipping duplicate.")
                continue
            seen[key] = trimmed

            directory_exists = self.filesystem.directory_exists(target.target_path)
            has_dirty_changes = (
                target.registered_path is not None
                and directory_exists
                and self.worktree_service.has_uncommitted_changes(target.registered_path)
            )

            resolved.append(
                BatchTarget(
                    input=trimmed,
                    target_path=target.target_path,
                    registered_path=target.registered_path,
                    registered_worktree=target.registered_worktree,
                    is_path_input=target.is_path_input,
                    directory_exists=directory_exists,
                    has_dirty_changes=has_dirty_changes,
                    display=get_removal_display(
                        cwd,
                        target.target_path,
                        target.registered_path,
                        target.registered_worktree,
                        target.is_path_input,
                        self.platform,
                    ),
                )
            )
            logger.debug(f"Resolved '{trimmed}' to {target.target_path}")

        return resolved

    def _confirm_dirty_targets(self, resolved: List[BatchTarget]) -> bool:
        """Ask once about every target with uncommitted changes."""
        dirty_targets = [target for target in resolved if target.has_dirty_changes]
        if not dirty_targets:
            return True

        config = self.config
        if config.force or config.assume_yes or config.dry_run:
            self.output.warn(format_dirty_summary(dirty_targets))
            return True

        proceed = self.prompter.confirm_action(
            format_dirty_confirmation(dirty_targets),
            assume_yes=config.assume_yes,
            dry_run=config.dry_run,
            allow_prompt=config.allow_prompt,
            prompt_disabled_message=(
                "Worktrees have uncommitted changes. Re-run with --yes, --force, or --dry-run "
                "to proceed in non-interactive mode."
            ),
        )
        if not proceed:
            self.output.warn("Removal cancelled.")
        return proceed

    def _confirm_removal(self, resolved: List[BatchTarget]) -> bool:
        """Show every target and ask once for all of them."""
        message = format_batch_confirmation(resolved)
        if self.config.dry_run:
            self.output.info(message)

        confirmed = self.prompter.confirm_action(
            message,
            assume_yes=self.config.assume_yes,
            dry_run=self.config.dry_run,
            allow_prompt=self.config.allow_prompt,
            prompt_disabled_message=(
                "Confirmation required. Re-run with --yes or --dry-run to proceed in non-interactive mode."
            ),
        )
        if not confirmed:
            self.output.warn("Removal cancelled.")
        return confirmed

    def prepare_cwd_switch(
        self, resolved: List[BatchTarget], invocation_cwd: str, main_path: str
    ) -> Optional[Callable[[], None]]:
        """Warn if this process runs inside a target and return the switch to perform later.

        Only this process moves; the calling shell keeps its directory and
        has to be moved by the user.

        Returns:
            A callable switching the process to the main worktree, or None if
            no switch is needed
        """
        matching_target = next(
            (
                target for target in resolved
                if is_path_equal_or_within(target.target_path, invocation_cwd, self.platform)
            ),
            None,
        )
        if matching_target is None or paths_equal(invocation_cwd, main_path, self.platform):
            return None

        dry_run = self.config.dry_run
        switch_verb = "would" if dry_run else "will"
        self.output.warn(
            f"Current directory is inside '{matching_target.display.target_name}'. The command "
            f"{switch_verb} switch to '{main_path}' before removing it, and your shell directory will not change."
        )

        def switch_to_main() -> None:
            if dry_run:
                self.output.info(f"Would switch process working directory to '{main_path}' before removal.")
                self.output.warn(
                    f"Dry run only. In a real run, your shell may still point to the removed directory. "
                    f"Switch it to '{main_path}' or another existing path."
                )
                return

            if paths_equal(self.filesystem.get_current_directory(), main_path, self.platform):
                return
            try:
                self.filesystem.change_directory(main_path)
            except OSError as e:
                raise WorktreeRemoveError(
                    f"Could not switch working directory to main worktree '{main_path}': {e}"
                ) from e
            self.output.info(f"Switched process working directory to '{main_path}' before removal.")
            self.output.warn(
                f"After removal, your shell may still point to a removed directory. "
                f"Switch it to '{main_path}' or another existing path."
            )

        return switch_to_main

    def _run_one(self, target: BatchTarget, main_path: str, skip_escalation_prompt: bool) -> RemovalOutcome:
        """Run the executor for one target; an unexpected error fails only that target."""
        name = target.display.target_name
        try:
            return self.executor.execute(target.to_context(), main_path, self.config, skip_escalation_prompt)
        except Exception as e:
            logger.debug(f"Error removing {target.target_path}", exc_info=True)
            self.output.error(f"Failed to remove '{name}': {e}")
            return RemovalOutcome.FAILED

    def _execute_all(self, resolved: List[BatchTarget], main_path: str) -> BatchResult:
        """Remove every target and wait for all of them, failures included.

        Only one prompt can own stdin, so with several targets in flight the
        escalation prompt is disabled for all of them.
        """
        if len(resolved) == 1:
            # Runs on this thread so an escalation prompt stays interruptible
            target = resolved[0]
            outcome = self._run_one(target, main_path, skip_escalation_prompt=False)
            return BatchResult([(target.display.target_name, outcome)])

        outcomes: List[Optional[RemovalOutcome]] = [None] * len(resolved)
        max_workers = self.config.max_workers
        logger.debug(f"Using {max_workers} workers for {len(resolved)} removals")

        executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="remove")
        try:
            future_to_index = {
                executor.submit(self._run_one, target, main_path, True): index
                for index, target in enumerate(resolved)
            }
            for future in as_completed(future_to_index):
                outcomes[future_to_index[future]] = future.result()
        except KeyboardInterrupt:
            # Queued removals must not start after an interrupt. Removals already
            # running are still joined by the interpreter before exit.
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        return BatchResult(
            [(target.display.target_name, outcome) for target, outcome in zip(resolved, outcomes)]
        )

    def _report(self, result: BatchResult) -> RemovalOutcome:
        """Summarize a batch; a single target reports through its own messages."""
        if len(result.outcomes) == 1:
            return result.overall

        verb = "Would remove" if self.config.dry_run else "Removed"
        self.output.warn(f"{verb} {len(result.succeeded)} of {len(result.outcomes)} worktrees.")
        if result.failed:
            self.output.error(f"Failed: {', '.join(result.failed)}")
        return result.overall
