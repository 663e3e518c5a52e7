"""
Configuration handling for version_hooks.

Defines the hook configuration schema and provides methods for loading/saving
it from a YAML file in the project root.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from .branch import DEFAULT_MASTER_BRANCH

# Looked up in the project root when no --config is given
DEFAULT_CONFIG_FILE = ".version-hooks.yaml"


class HookConfig(BaseModel):
    """Settings for the pre-push validation."""

    check_pkg_name: bool = Field(
        default=True,
        description="Rewrite package.json name to the project directory name",
    )
    check_pkg_version: bool = Field(
        default=True,
        description="Rewrite package.json version to the branch version",
    )

    # Commands run through the shell before the push goes out
    on_tag_push_exec: str | None = Field(
        default=None, description="Command to run when pushing a v<x.y.z> branch"
    )
    on_branch_push_exec: str | None = Field(
        default=None, description="Command to run when pushing a d<x.y.z> branch"
    )

    merge_to_master: bool = Field(
        default=False,
        description="Merge tag branches into the master branch and push it",
    )
    master_branch: str = Field(
        default=DEFAULT_MASTER_BRANCH, description="Name of the release branch"
    )
    remote: str = Field(
        default="origin", description="Remote the master branch is pushed to"
    )

    @classmethod
    def from_yaml(cls, path: Path) -> "HookConfig":
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )


class InstallConfig(BaseModel):
    """Which hooks the installer wires into package.json."""

    # npm script key -> hook script name under hooks/
    hooks: dict[str, str] = Field(
        default_factory=lambda: {
            "prepush": "pre-push",
            "precommit": "pre-commit",
        },
        description="Mapping of npm script keys to hook script names",
    )
    hooks_dir: str = Field(
        default="hooks", description="Directory in the project the hooks are copied to"
    )
    python: str = Field(
        default="python", description="Interpreter used in the npm script commands"
    )

    def command_for(self, hook_name: str) -> str:
        """The npm script command that runs a copied hook script."""
        return f"{self.python} ./{self.hooks_dir}/{hook_name}.py"


def load_config(project_dir: Path, config_path: Path | None = None) -> HookConfig:
    """
    Load the hook configuration for a project.

    An explicit config_path must exist. Otherwise the default file in the
    project root is used if present, and built-in defaults if not.
    """
    if config_path is not None:
        return HookConfig.from_yaml(config_path)

    default_path = Path(project_dir) / DEFAULT_CONFIG_FILE
    if default_path.exists():
        return HookConfig.from_yaml(default_path)
    return HookConfig()
