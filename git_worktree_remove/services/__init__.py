"""Services used by the worktree remover.

Collaborators (git, filesystem, output, prompting) live beside the pure
resolution, safety and execution logic so tests can swap them for mocks.
"""
