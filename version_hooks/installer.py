"""
Hook installer.

Copies the packaged hook scripts into a project's ``hooks/`` directory,
registers them as npm scripts in package.json, and optionally writes small
shims into ``.git/hooks`` so git runs them without an npm hook runner.
"""

import os
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from .config import InstallConfig
from .git_ops import GitRepository
from .manifest import PackageManifest

console = Console()

# Hook scripts shipped inside the package
PACKAGE_HOOKS_DIR = Path(__file__).parent / "hooks"

MANAGED_SHIM_MARKER = "VERSION_HOOKS_MANAGED_SHIM=1"


@dataclass
class InstallResult:
    """Result of installing hooks into a project."""

    hooks_dir: Path
    copied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    scripts_added: list[str] = field(default_factory=list)
    scripts_existing: list[str] = field(default_factory=list)
    shims_installed: list[str] = field(default_factory=list)
    shims_skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def _quote_shell_literal(value: str) -> str:
    """Return a POSIX-safe single-quoted literal."""
    return "'" + value.replace("'", "'\"'\"'") + "'"


def _set_executable(path: Path) -> None:
    if os.name != "nt":
        path.chmod(0o755)


def is_managed_shim(path: Path) -> bool:
    """Return True when path is a shim written by this installer."""
    if not path.is_file():
        return False
    try:
        content = path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return False
    return MANAGED_SHIM_MARKER in content


def render_shim(hook_name: str, script: str, project_subdir: str, python: str) -> str:
    """Render a git hook that hands off to the project's copied hook script."""
    lines = [
        "#!/bin/sh",
        f"# {MANAGED_SHIM_MARKER}",
        f"# version-hooks managed git hook shim ({hook_name})",
    ]
    if project_subdir and project_subdir != ".":
        lines.append(f"cd {_quote_shell_literal(project_subdir)} || exit 1")
    lines.append(f"exec {_quote_shell_literal(python)} {_quote_shell_literal(script)}")
    return "\n".join(lines) + "\n"


class HookInstaller:
    """Installs the hook scripts into one project."""

    def __init__(
        self,
        project_dir: Path,
        install_config: InstallConfig | None = None,
        source_dir: Path | None = None,
    ):
        self.project_dir = Path(project_dir).resolve()
        self.install_config = install_config or InstallConfig()
        self.source_dir = source_dir or PACKAGE_HOOKS_DIR

    @property
    def hooks_dir(self) -> Path:
        return self.project_dir / self.install_config.hooks_dir

    def copy_hooks(self, force: bool = False, result: InstallResult | None = None) -> InstallResult:
        """Copy the hook scripts into the project, keeping existing files unless forced."""
        result = result or InstallResult(hooks_dir=self.hooks_dir)
        if not self.source_dir.is_dir():
            result.errors.append(f"Hook scripts not found: {self.source_dir}")
            return result

        self.hooks_dir.mkdir(parents=True, exist_ok=True)
        for source in sorted(self.source_dir.iterdir()):
            if not source.is_file() or source.name.startswith("."):
                continue
            dest = self.hooks_dir / source.name
            if dest.exists() and not force:
                result.skipped.append(source.name)
                continue
            shutil.copy2(source, dest)
            _set_executable(dest)
            result.copied.append(source.name)

        console.print(f"[cyan]Hooks copied to {self.hooks_dir}[/cyan]")
        return result

    def add_npm_scripts(self, result: InstallResult | None = None) -> InstallResult:
        """Register each hook in package.json scripts."""
        result = result or InstallResult(hooks_dir=self.hooks_dir)
        manifest = PackageManifest.load(self.project_dir)

        for key, hook_name in self.install_config.hooks.items():
            command = self.install_config.command_for(hook_name)
            if manifest.add_script(key, command):
                result.scripts_added.append(key)
            else:
                result.scripts_existing.append(key)
                console.print(f"[yellow]Script '{key}' already exists![/yellow]")

        manifest.save()
        console.print("[cyan]Npm scripts added![/cyan]")
        return result

    def install_git_shims(self, force: bool = False, result: InstallResult | None = None) -> InstallResult:
        """Write .git/hooks shims; hooks not written by us are left alone unless forced."""
        result = result or InstallResult(hooks_dir=self.hooks_dir)
        repo = GitRepository(self.project_dir)
        git_hooks_dir = Path(repo.repo.git_dir) / "hooks"
        git_hooks_dir.mkdir(parents=True, exist_ok=True)

        project_subdir = os.path.relpath(self.project_dir, repo.root)
        for hook_name in self.install_config.hooks.values():
            script = f"./{self.install_config.hooks_dir}/{hook_name}.py"
            dest = git_hooks_dir / hook_name
            if dest.exists() and not is_managed_shim(dest) and not force:
                result.shims_skipped.append(hook_name)
                continue
            dest.write_text(
                render_shim(hook_name, script, project_subdir, sys.executable),
                encoding="utf-8",
            )
            _set_executable(dest)
            result.shims_installed.append(hook_name)

        if result.shims_skipped:
            console.print(
                f"[yellow]Left existing git hooks in place: {', '.join(result.shims_skipped)} "
                f"(use --force to replace them)[/yellow]"
            )
        return result

    def install(self, git_hooks: bool = False, force: bool = False) -> InstallResult:
        """
        Install everything: copy the scripts, then register them.

        Raises:
            ManifestNotFoundError: if the project has no package.json
        """
        result = InstallResult(hooks_dir=self.hooks_dir)
        self.copy_hooks(force=force, result=result)
        self.add_npm_scripts(result=result)
        if git_hooks:
            self.install_git_shims(force=force, result=result)
        return result
