"""
Git operations used by the hooks.

Provides a thin wrapper around GitPython for the handful of git commands the
hooks need: reading the current branch, grepping tracked files, checking the
working tree, and the checkout/merge/push sequence for releases.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .errors import HookError

# A line opening or closing a conflict ("<<<<<<< HEAD", ">>>>>>> branch")
# or a separator line, which may end in "\r" in CRLF files.
CONFLICT_MARKER_PATTERN = r"^(<<<<<<<|>>>>>>>)[[:space:]]|^=======[[:space:]]*$"

# "<line>\0<text>" after the path; older git separates line and text with ":"
GREP_LINE_PATTERN = re.compile(r"(\d+)[\0:](.*)", re.DOTALL)


@dataclass
class GrepMatch:
    """A single line reported by git grep."""

    path: str
    line: int
    text: str


def _describe(error: GitCommandError) -> str:
    """Human-readable summary of a failed git command."""
    command = error.command
    if isinstance(command, (list, tuple)):
        command = " ".join(str(part) for part in command)
    detail = (error.stderr or "").strip()
    # GitPython prefixes captured stderr with "stderr: '"
    if detail.startswith("stderr: "):
        detail = detail[len("stderr: "):].strip("'").strip()
    return f"{command} failed: {detail}" if detail else f"{command} failed"


class GitRepository:
    """Wrapper around a git repository for hook operations."""

    def __init__(self, path: Path):
        """Initialize repository wrapper."""
        self.path = Path(path).resolve()
        try:
            self.repo = Repo(self.path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise ValueError(f"Not a valid git repository: {self.path}") from e

    @property
    def root(self) -> Path:
        """Top level of the working tree."""
        return Path(self.repo.working_tree_dir)

    def get_current_branch(self) -> str:
        """Get the current branch name (git symbolic-ref --short HEAD)."""
        try:
            return self.repo.git.symbolic_ref("--short", "HEAD").strip()
        except GitCommandError as e:
            raise HookError(f"Could not determine the current branch: {_describe(e)}") from e

    def grep(self, pattern: str) -> list[GrepMatch]:
        """
        Search tracked files for an extended regular expression.

        git grep exits with status 1 when nothing matches, which is reported
        here as an empty list rather than an error.
        """
        try:
            output = self.repo.git.grep("-n", "-I", "--null", "-E", "-e", pattern)
        except GitCommandError as e:
            if e.status == 1:
                return []
            raise HookError(_describe(e)) from e

        matches = []
        # splitlines() would also break at the "\r" of CRLF files
        for raw_line in output.split("\n"):
            if not raw_line:
                continue
            path, sep, rest = raw_line.partition("\0")
            match = GREP_LINE_PATTERN.match(rest)
            if not sep or not match:
                raise HookError(f"Unexpected git grep output: {raw_line!r}")
            matches.append(
                GrepMatch(
                    path=path,
                    line=int(match.group(1)),
                    text=match.group(2).rstrip("\r"),
                )
            )
        return matches

    def grep_conflict_markers(self) -> list[GrepMatch]:
        """Find conflict markers left in tracked files."""
        return self.grep(CONFLICT_MARKER_PATTERN)

    def is_clean(self) -> bool:
        """Check that git status reports no changes or untracked files."""
        try:
            status = self.repo.git.status("--porcelain")
        except GitCommandError as e:
            raise HookError(_describe(e)) from e
        return not status.strip()

    def checkout(self, branch: str) -> None:
        """Switch to a branch."""
        try:
            self.repo.git.checkout(branch)
        except GitCommandError as e:
            raise HookError(_describe(e)) from e

    def merge(self, branch: str) -> None:
        """Merge a branch into the current one without opening an editor."""
        try:
            self.repo.git.merge("--no-edit", branch)
        except GitCommandError as e:
            raise HookError(_describe(e)) from e

    def abort_merge(self) -> None:
        """Back out of a merge that stopped on conflicts."""
        try:
            self.repo.git.merge("--abort")
        except GitCommandError:
            pass  # No merge in progress

    def push(self, remote: str = "origin", branch: str | None = None) -> None:
        """Push a branch to a remote."""
        target_branch = branch or self.get_current_branch()
        try:
            self.repo.git.push(remote, target_branch)
        except GitCommandError as e:
            raise HookError(_describe(e)) from e
