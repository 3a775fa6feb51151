"""Allow running as ``python -m git_worktree_remove``."""

import sys

from git_worktree_remove.cli.main import main

sys.exit(main())
