"""
Pre-push validation.

Before a push goes out this checks that the current branch is a release
branch (``v1.2.3``, ``d1.2.3`` or master), brings package.json's name and
version in line with the project directory and branch, runs the configured
release commands, and optionally merges tag branches into master.
"""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from .branch import BranchInfo, parse_branch
from .config import HookConfig
from .errors import HookError
from .git_ops import GitRepository
from .manifest import PackageManifest

console = Console()


@dataclass
class PushResult:
    """Result of a pre-push run."""

    branch: BranchInfo | None = None
    exit_code: int = 0
    name_updated: bool = False
    version_updated: bool = False
    commands_run: list[str] = field(default_factory=list)
    merged: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    def fail(self, message: str) -> "PushResult":
        self.errors.append(message)
        self.exit_code = 1
        return self


class PrePushValidator:
    """Runs the pre-push checks for one project."""

    def __init__(
        self,
        project_dir: Path,
        config: HookConfig | None = None,
        repo: GitRepository | None = None,
    ):
        """Initialize the validator for a project directory."""
        self.project_dir = Path(project_dir).resolve()
        self.config = config or HookConfig()
        self.repo = repo
        self._manifest: PackageManifest | None = None

    def _get_repo(self) -> GitRepository:
        if self.repo is None:
            self.repo = GitRepository(self.project_dir)
        return self.repo

    def _get_manifest(self) -> PackageManifest:
        if self._manifest is None:
            self._manifest = PackageManifest.load(self.project_dir)
        return self._manifest

    @property
    def project_name(self) -> str:
        """The project name is the name of its directory."""
        return self.project_dir.name

    def run(self) -> PushResult:
        """
        Run every enabled check in order.

        Returns:
            PushResult whose exit_code is the hook's exit status
        """
        result = PushResult()

        try:
            if self.config.check_pkg_name:
                result.name_updated = self.check_name()

            branch = parse_branch(
                self._get_repo().get_current_branch(),
                master_branch=self.config.master_branch,
            )
            result.branch = branch

            if not branch.is_valid:
                console.print(
                    f"[red]Branch name '{branch.name}' is not valid, switch to a version "
                    f"branch before pushing. Expected v<x.y.z> (e.g. v1.0.0), "
                    f"d<x.y.z> (e.g. d1.0.0) or {self.config.master_branch}.[/red]"
                )
                return result.fail(f"Invalid branch name: {branch.name}")

            if branch.is_master:
                return result

            if self.config.check_pkg_version:
                result.version_updated = self.check_version(branch)

            command = self.command_for(branch)
            if command:
                self.exec_command(command)
                result.commands_run.append(command)

            if branch.is_tag and self.config.merge_to_master:
                self.merge_to_master(branch)
                result.merged = True

        except HookError as e:
            console.print(f"[red]{e}[/red]")
            return result.fail(str(e))

        return result

    def check_name(self) -> bool:
        """Make package.json's name match the project directory name."""
        manifest = self._get_manifest()
        if not manifest.sync_name(self.project_name):
            return False

        manifest.save()
        console.print(
            f"[yellow]package.json name did not match the project directory, "
            f"changed it to: {self.project_name}[/yellow]"
        )
        return True

    def check_version(self, branch: BranchInfo) -> bool:
        """Make package.json's version match the version in the branch name."""
        if branch.version is None:
            return False

        manifest = self._get_manifest()
        if not manifest.sync_version(branch.version):
            return False

        manifest.save()
        console.print(
            f"[yellow]package.json version did not match branch {branch.name}, "
            f"changed it to: {branch.version}[/yellow]"
        )
        return True

    def command_for(self, branch: BranchInfo) -> str | None:
        """The configured command for this kind of branch, if any."""
        if branch.is_tag:
            return self.config.on_tag_push_exec
        if branch.is_version_branch:
            return self.config.on_branch_push_exec
        return None

    def exec_command(self, command: str) -> None:
        """Run a user command through the shell in the project directory."""
        console.print(f"[cyan]Running: {command}[/cyan]")
        completed = subprocess.run(command, shell=True, cwd=str(self.project_dir))
        if completed.returncode != 0:
            raise HookError(f"Command failed with exit code {completed.returncode}: {command}")

    def merge_to_master(self, branch: BranchInfo) -> None:
        """Merge a released tag branch into master, push master, and switch back."""
        repo = self._get_repo()
        master = self.config.master_branch

        if not repo.is_clean():
            raise HookError(
                f"Working tree has uncommitted changes, commit them before "
                f"merging {branch.name} into {master}."
            )

        console.print(f"[cyan]Merging {branch.name} into {master}...[/cyan]")
        repo.checkout(master)
        try:
            try:
                repo.merge(branch.name)
            except HookError:
                repo.abort_merge()
                raise
            repo.push(self.config.remote, master)
        except HookError as e:
            try:
                repo.checkout(branch.name)
            except HookError as checkout_error:
                raise HookError(
                    f"{e}\nCould not switch back to {branch.name}: {checkout_error}"
                ) from e
            raise
        repo.checkout(branch.name)

        console.print(f"[green]Merged {branch.name} into {master} and pushed to {self.config.remote}.[/green]")
