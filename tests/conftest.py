"""Pytest configuration and fixtures for version_hooks tests."""

import json
import tempfile
from pathlib import Path

import pytest
from git import Repo


def write_package_json(project_dir: Path, **fields) -> Path:
    """Write a package.json with the given fields."""
    data = {"name": "my-app", "version": "1.0.0", "scripts": {"test": "jest"}}
    data.update(fields)
    path = project_dir / "package.json"
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def read_package_json(project_dir: Path) -> dict:
    return json.loads((project_dir / "package.json").read_text())


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_repo(temp_dir: Path):
    """Create a git repository holding an npm project, on branch master."""
    repo_path = temp_dir / "my-app"
    repo_path.mkdir()

    # Initialize git repo
    repo = Repo.init(repo_path)

    # Configure git user
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    # Create initial commit
    write_package_json(repo_path)
    (repo_path / "README.md").write_text("# My App\n")
    repo.index.add(["package.json", "README.md"])
    repo.index.commit("Initial commit")
    repo.git.branch("-M", "master")

    yield repo_path


@pytest.fixture
def remote_repo(temp_dir: Path, project_repo: Path):
    """Create a bare repository and register it as the project's origin."""
    remote_path = temp_dir / "remote.git"
    Repo.init(remote_path, bare=True)

    repo = Repo(project_repo)
    repo.create_remote("origin", str(remote_path))
    repo.git.push("origin", "master")

    yield remote_path


def checkout_branch(project_repo: Path, branch: str) -> None:
    """Create and switch to a branch in the project repo."""
    Repo(project_repo).git.checkout("-b", branch)
