"""
Version Hooks - Git hooks that gate pushes on version-named branches.

This package installs pre-commit and pre-push hook scripts into a project,
checks for leftover merge conflict markers, and keeps package.json's name and
version in step with the branch being pushed.
"""

__version__ = "1.0.0"
