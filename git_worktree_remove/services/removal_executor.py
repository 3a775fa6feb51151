"""Removal of a single resolved target: move to trash, then unregister from git."""

from typing import Optional

from git_worktree_remove.config import Config
from git_worktree_remove.exceptions import PromptDisabledError
from git_worktree_remove.models.target import RemovalContext, RemovalOutcome
from git_worktree_remove.services.filesystem import FilesystemService
from git_worktree_remove.services.git.worktrees import WorktreeService
from git_worktree_remove.services.output import OutputWriter
from git_worktree_remove.services.prompt import Prompter
from git_worktree_remove.utils.logging import get_logger

logger = get_logger(__name__)


class RemovalExecutor:
    """Runs the trash-then-unregister protocol for one target.

    The directory is moved to the trash first so its contents stay
    recoverable. Git is only asked to unregister afterwards. If the trash move
    fails for a registered worktree, unregistering can still go ahead with
    --force, --yes or an explicit confirmation; git may then delete the
    directory permanently. Dry-run follows the same branches but only
    announces each mutation.
    """

    def __init__(
        self,
        worktree_service: WorktreeService,
        filesystem: FilesystemService,
        output: OutputWriter,
        prompter: Prompter,
    ):
        self.worktree_service = worktree_service
        self.filesystem = filesystem
        self.output = output
        self.prompter = prompter

    def execute(
        self,
        context: RemovalContext,
        main_path: str,
        config: Config,
        skip_escalation_prompt: bool = False,
    ) -> RemovalOutcome:
        """Remove one target.

        Args:
            context: Resolved target
            main_path: Path of the main worktree, git runs from there
            config: Shared removal options
            skip_escalation_prompt: Never prompt; an escalation that would
                need an answer fails the target instead

        Returns:
            RemovalOutcome of this attempt
        """
        output = self.output
        output.info(f"Removing {context.status} '{context.target_name}'...")

        exists_before = self.filesystem.directory_exists(context.target_path)
        moved_to_trash = False
        force_unregister = config.force

        if exists_before:
            if config.dry_run:
                output.info(f"Would move '{context.target_path}' to trash.")
            else:
                output.info("Moving directory to trash...")
                moved_to_trash, trash_error = self.filesystem.move_to_trash(context.target_path)
                if moved_to_trash:
                    output.info("Directory moved to trash.")
                elif context.registered_path:
                    logger.debug(f"Trash move failed for {context.target_path}: {trash_error}")
                    stop = self._escalate(context, config, skip_escalation_prompt)
                    if stop is not None:
                        return stop
                    # Git may now delete the directory permanently, so dirty
                    # worktrees must be unregistered with --force.
                    force_unregister = True
                else:
                    output.error(
                        f"Could not move '{context.target_name}' to trash: {trash_error}. Remove it manually."
                    )
                    return RemovalOutcome.FAILED

        outcome = RemovalOutcome.OK

        if context.registered_path:
            if config.dry_run:
                output.info(f"Would unregister '{context.registered_path}' from Git.")
            else:
                output.info("Unregistering from Git...")
                unregistered, unregister_error = self.worktree_service.remove_worktree(
                    main_path, context.registered_path, force=force_unregister
                )
                if unregistered:
                    output.info("Unregistered from Git.")
                else:
                    logger.debug(f"Unregister failed for {context.registered_path}: {unregister_error}")
                    output.warn("Could not fully unregister from Git (may be partially removed).")

                # The directory on disk decides success, not git's exit status
                if exists_before and not moved_to_trash:
                    if self.filesystem.directory_exists(context.target_path):
                        output.warn("Directory still exists. Remove it manually.")
                        if not unregistered:
                            outcome = RemovalOutcome.FAILED
                    else:
                        output.info("Directory was removed by Git.")

        # Only report when the directory never existed; it may vanish between checks
        if not exists_before and not context.directory_existed_initially:
            output.info("Directory did not exist.")

        if outcome is RemovalOutcome.OK:
            output.info("Done.")
        return outcome

    def _escalate(
        self, context: RemovalContext, config: Config, skip_escalation_prompt: bool
    ) -> Optional[RemovalOutcome]:
        """Decide whether to unregister after a failed trash move.

        Returns:
            None to proceed with a forced unregister, otherwise the outcome to stop with
        """
        if config.force or config.assume_yes:
            self.output.warn("Could not move directory to trash. Git may permanently delete it.")
            return None

        if skip_escalation_prompt:
            self.output.error(
                f"Could not move '{context.target_name}' to trash. Re-run with --yes or --force "
                "to unregister it anyway, or remove it on its own to be asked."
            )
            return RemovalOutcome.FAILED

        try:
            proceed = self.prompter.confirm_action(
                f"Could not move directory '{context.target_name}' to trash. Proceed with "
                "unregistering anyway? (Git may permanently delete it)",
                assume_yes=config.assume_yes,
                dry_run=config.dry_run,
                allow_prompt=config.allow_prompt,
                prompt_disabled_message=(
                    "Trash move failed. Re-run with --yes or --force to proceed in non-interactive mode."
                ),
            )
        except PromptDisabledError as e:
            self.output.error(str(e))
            return RemovalOutcome.FAILED

        if not proceed:
            self.output.warn("Removal cancelled.")
            return RemovalOutcome.CANCELLED
        return None
