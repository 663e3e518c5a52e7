"""Tests for the hook installer."""

import os
from pathlib import Path

import pytest

from conftest import read_package_json
from version_hooks.config import InstallConfig
from version_hooks.errors import ManifestNotFoundError
from version_hooks.installer import (
    MANAGED_SHIM_MARKER,
    PACKAGE_HOOKS_DIR,
    HookInstaller,
    is_managed_shim,
    render_shim,
)


class TestCopyHooks:
    """Tests for copying the hook scripts."""

    def test_package_ships_hooks(self):
        """Test that the packaged hook scripts exist."""
        names = sorted(p.name for p in PACKAGE_HOOKS_DIR.iterdir() if p.suffix == ".py")
        assert names == ["pre-commit.py", "pre-push.py"]

    def test_copy(self, project_repo: Path):
        """Test that scripts land in the project's hooks directory."""
        result = HookInstaller(project_repo).copy_hooks()
        assert sorted(result.copied) == ["pre-commit.py", "pre-push.py"]
        assert (project_repo / "hooks" / "pre-push.py").is_file()
        if os.name != "nt":
            assert os.access(project_repo / "hooks" / "pre-push.py", os.X_OK)

    def test_existing_files_kept(self, project_repo: Path):
        """Test that customised scripts are not overwritten without force."""
        hooks_dir = project_repo / "hooks"
        hooks_dir.mkdir()
        (hooks_dir / "pre-push.py").write_text("# custom\n")

        result = HookInstaller(project_repo).copy_hooks()
        assert result.skipped == ["pre-push.py"]
        assert (hooks_dir / "pre-push.py").read_text() == "# custom\n"

        result = HookInstaller(project_repo).copy_hooks(force=True)
        assert "pre-push.py" in result.copied
        assert (hooks_dir / "pre-push.py").read_text() != "# custom\n"

    def test_missing_source(self, project_repo: Path, temp_dir: Path):
        """Test that a missing source directory is an error."""
        installer = HookInstaller(project_repo, source_dir=temp_dir / "nowhere")
        result = installer.copy_hooks()
        assert result.success is False


class TestNpmScripts:
    """Tests for registering hooks in package.json."""

    def test_scripts_added(self, project_repo: Path):
        """Test that each hook becomes an npm script."""
        result = HookInstaller(project_repo).add_npm_scripts()
        assert sorted(result.scripts_added) == ["precommit", "prepush"]

        scripts = read_package_json(project_repo)["scripts"]
        assert scripts["prepush"] == "python ./hooks/pre-push.py"
        assert scripts["precommit"] == "python ./hooks/pre-commit.py"
        assert scripts["test"] == "jest"

    def test_second_install_reports_existing(self, project_repo: Path):
        """Test that installing twice does not duplicate commands."""
        HookInstaller(project_repo).add_npm_scripts()
        result = HookInstaller(project_repo).add_npm_scripts()
        assert result.scripts_added == []
        assert sorted(result.scripts_existing) == ["precommit", "prepush"]
        assert read_package_json(project_repo)["scripts"]["prepush"] == "python ./hooks/pre-push.py"

    def test_missing_manifest(self, project_repo: Path):
        """Test that a project without package.json is rejected."""
        (project_repo / "package.json").unlink()
        with pytest.raises(ManifestNotFoundError):
            HookInstaller(project_repo).add_npm_scripts()

    def test_selected_hooks_only(self, project_repo: Path):
        """Test installing a subset of hooks."""
        config = InstallConfig(hooks={"prepush": "pre-push"})
        HookInstaller(project_repo, config).add_npm_scripts()
        scripts = read_package_json(project_repo)["scripts"]
        assert "prepush" in scripts
        assert "precommit" not in scripts


class TestGitShims:
    """Tests for .git/hooks shims."""

    def test_render_shim(self):
        """Test shim contents."""
        shim = render_shim("pre-push", "./hooks/pre-push.py", ".", "/usr/bin/python3")
        assert shim.startswith("#!/bin/sh\n")
        assert MANAGED_SHIM_MARKER in shim
        assert "cd " not in shim
        assert shim.endswith("exec '/usr/bin/python3' './hooks/pre-push.py'\n")

    def test_render_shim_in_subdirectory(self):
        """Test that nested projects change directory first."""
        shim = render_shim("pre-push", "./hooks/pre-push.py", "packages/web", "python3")
        assert "cd 'packages/web' || exit 1\n" in shim

    def test_install_shims(self, project_repo: Path):
        """Test writing shims into .git/hooks."""
        result = HookInstaller(project_repo).install_git_shims()
        assert sorted(result.shims_installed) == ["pre-commit", "pre-push"]

        shim = project_repo / ".git" / "hooks" / "pre-push"
        assert is_managed_shim(shim)
        assert "./hooks/pre-push.py" in shim.read_text()

    def test_foreign_hook_left_alone(self, project_repo: Path):
        """Test that hooks not written by the installer survive."""
        hooks_dir = project_repo / ".git" / "hooks"
        hooks_dir.mkdir(exist_ok=True)
        (hooks_dir / "pre-push").write_text("#!/bin/sh\necho mine\n")

        result = HookInstaller(project_repo).install_git_shims()
        assert result.shims_skipped == ["pre-push"]
        assert (hooks_dir / "pre-push").read_text() == "#!/bin/sh\necho mine\n"

        result = HookInstaller(project_repo).install_git_shims(force=True)
        assert "pre-push" in result.shims_installed
        assert is_managed_shim(hooks_dir / "pre-push")

    def test_reinstall_updates_own_shims(self, project_repo: Path):
        """Test that managed shims are rewritten without force."""
        HookInstaller(project_repo).install_git_shims()
        result = HookInstaller(project_repo).install_git_shims()
        assert result.shims_skipped == []


class TestInstall:
    """Tests for the full install."""

    def test_install(self, project_repo: Path):
        """Test copy, scripts and shims together."""
        result = HookInstaller(project_repo).install(git_hooks=True)
        assert result.success
        assert (project_repo / "hooks" / "pre-commit.py").is_file()
        assert "prepush" in read_package_json(project_repo)["scripts"]
        assert is_managed_shim(project_repo / ".git" / "hooks" / "pre-commit")

    def test_install_without_manifest(self, project_repo: Path):
        """Test that hooks are copied before the missing manifest is noticed."""
        (project_repo / "package.json").unlink()
        with pytest.raises(ManifestNotFoundError):
            HookInstaller(project_repo).install()
        assert (project_repo / "hooks" / "pre-push.py").is_file()
