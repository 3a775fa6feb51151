"""Command-line entry point for git-worktree-remove"""

import os
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from git_worktree_remove.cli.args import parse_args
from git_worktree_remove.config import Config
from git_worktree_remove.constants import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK
from git_worktree_remove.core import WorktreeRemover
from git_worktree_remove.exceptions import WorktreeRemoveError
from git_worktree_remove.models.target import RemovalOutcome
from git_worktree_remove.utils.logging import setup_logging

console = Console(stderr=True)

EXIT_CODES = {
    RemovalOutcome.OK: EXIT_OK,
    RemovalOutcome.CANCELLED: EXIT_OK,
    RemovalOutcome.FAILED: EXIT_FAILURE,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    try:
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, quiet=parsed_args.quiet)

        config = Config(
            dry_run=parsed_args.dry_run,
            assume_yes=parsed_args.yes,
            force=parsed_args.force,
            allow_prompt=sys.stdin.isatty() and not parsed_args.no_interactive,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        remover = WorktreeRemover(os.getcwd(), config)
        outcome = remover.remove_batch(parsed_args.targets)
        return EXIT_CODES[outcome]
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return EXIT_INTERRUPTED
    except WorktreeRemoveError as e:
        console.print(Text(str(e), style="red"))
        if parsed_args.debug:
            console.print_exception()
        return EXIT_FAILURE
    except Exception as e:
        console.print(Text(f"Error: {e}", style="red"))
        if parsed_args.debug:
            console.print_exception()
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
