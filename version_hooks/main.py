"""
CLI entry point for version_hooks.

Provides the commands the hook scripts call, plus the installer.
"""

from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console

from .config import InstallConfig, load_config
from .conflicts import check_conflicts
from .errors import HookError, ManifestNotFoundError
from .git_ops import GitRepository
from .installer import HookInstaller
from .prepush import PrePushValidator

console = Console()

project_dir_option = click.option(
    "--project-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=Path("."),
    help="Project root containing package.json (defaults to the current directory)",
)


@click.group()
@click.version_option(package_name="version-hooks")
def cli():
    """Version Hooks - release checks for git pushes on version branches."""
    pass


@cli.command(name="check-conflicts")
@project_dir_option
def check_conflicts_command(project_dir: Path):
    """Fail if any tracked file contains merge conflict markers."""
    try:
        repo = GitRepository(project_dir)
        exit_code = check_conflicts(repo)
    except (ValueError, HookError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if exit_code:
        raise SystemExit(exit_code)


@cli.command(name="pre-push")
@project_dir_option
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to the hook configuration file (defaults to .version-hooks.yaml)",
)
@click.option(
    "--cn",
    "--checkpkgname",
    "check_pkg_name",
    is_flag=True,
    help="Check that package.json name matches the project directory",
)
@click.option(
    "--cv",
    "--checkpkgversion",
    "check_pkg_version",
    is_flag=True,
    help="Check that package.json version matches the branch version",
)
@click.option(
    "--tagpush",
    "--ontagpushexec",
    "on_tag_push_exec",
    default=None,
    help="Command to run before pushing a v<x.y.z> branch",
)
@click.option(
    "--branchpush",
    "--onbranchpushexec",
    "on_branch_push_exec",
    default=None,
    help="Command to run before pushing a d<x.y.z> branch",
)
@click.option(
    "--merge-master",
    is_flag=True,
    help="Merge v<x.y.z> branches into master and push it",
)
def pre_push(
    project_dir: Path,
    config_path: Path | None,
    check_pkg_name: bool,
    check_pkg_version: bool,
    on_tag_push_exec: str | None,
    on_branch_push_exec: str | None,
    merge_master: bool,
):
    """Validate the branch name and sync package.json before pushing.

    Without --cn or --cv both checks run (unless turned off in the config
    file). Passing either one runs only the checks that were passed.
    """
    try:
        config = load_config(project_dir, config_path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise SystemExit(1)

    if check_pkg_name or check_pkg_version:
        config.check_pkg_name = check_pkg_name
        config.check_pkg_version = check_pkg_version
    if on_tag_push_exec:
        config.on_tag_push_exec = on_tag_push_exec
    if on_branch_push_exec:
        config.on_branch_push_exec = on_branch_push_exec
    if merge_master:
        config.merge_to_master = True

    try:
        validator = PrePushValidator(project_dir, config)
        result = validator.run()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if not result.success:
        raise SystemExit(result.exit_code)


@cli.command()
@project_dir_option
@click.option(
    "--git-hooks/--no-git-hooks",
    default=False,
    help="Also write shims into .git/hooks that run the copied scripts",
)
@click.option(
    "--force",
    is_flag=True,
    help="Overwrite existing hook scripts and git hooks",
)
@click.option(
    "--hook",
    "hooks",
    multiple=True,
    type=click.Choice(["pre-commit", "pre-push"]),
    help="Hook to register (can be specified multiple times, defaults to all)",
)
def install(project_dir: Path, git_hooks: bool, force: bool, hooks: tuple[str, ...]):
    """Copy the hook scripts into a project and register them."""
    install_config = InstallConfig()
    if hooks:
        install_config.hooks = {
            key: name for key, name in install_config.hooks.items() if name in hooks
        }

    installer = HookInstaller(project_dir, install_config)
    try:
        result = installer.install(git_hooks=git_hooks, force=force)
    except ManifestNotFoundError:
        console.print("[red]Could not find package.json![/red]")
        raise SystemExit(1)
    except (ValueError, HookError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    if not result.success:
        for error in result.errors:
            console.print(f"[red]{error}[/red]")
        raise SystemExit(1)

    console.print("[green]Hooks install success![/green]")
    if result.skipped:
        console.print(f"  Kept existing: {', '.join(result.skipped)}")
    if result.shims_installed:
        console.print(f"  Git hooks: {', '.join(result.shims_installed)}")


if __name__ == "__main__":
    cli()
