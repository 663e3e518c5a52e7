"""
Reading and rewriting the project's package.json.

Only the name, version and scripts fields are touched; everything else is
written back as it was read, in the same key order.
"""

import json
from pathlib import Path
from typing import Any

from .errors import ManifestError, ManifestNotFoundError

MANIFEST_FILE = "package.json"


class PackageManifest:
    """A package.json document loaded from disk."""

    def __init__(self, path: Path, data: dict[str, Any], trailing_newline: bool = False):
        self.path = Path(path)
        self.data = data
        self.trailing_newline = trailing_newline

    @classmethod
    def load(cls, project_dir: Path) -> "PackageManifest":
        """Load package.json from a project directory."""
        path = Path(project_dir) / MANIFEST_FILE
        if not path.is_file():
            raise ManifestNotFoundError(f"Could not find {MANIFEST_FILE} in {path.parent}")

        text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ManifestError(f"Expected a JSON object in {path}")

        return cls(path, data, trailing_newline=text.endswith("\n"))

    @property
    def name(self) -> str | None:
        return self.data.get("name")

    @property
    def version(self) -> str | None:
        return self.data.get("version")

    @property
    def scripts(self) -> dict[str, str]:
        scripts = self.data.get("scripts")
        return scripts if isinstance(scripts, dict) else {}

    def sync_name(self, name: str) -> bool:
        """Set the name field, returning True if it changed."""
        if self.name == name:
            return False
        self.data["name"] = name
        return True

    def sync_version(self, version: str) -> bool:
        """Set the version field, returning True if it changed."""
        if self.version == version:
            return False
        self.data["version"] = version
        return True

    def add_script(self, key: str, command: str) -> bool:
        """
        Merge a command into scripts[key].

        A missing script is created, an existing one gets the command chained
        on with ``&&``. Returns False if the command is already there.
        """
        scripts = self.data.get("scripts")
        if scripts is None:
            scripts = self.data["scripts"] = {}
        elif not isinstance(scripts, dict):
            raise ManifestError(f"Expected \"scripts\" to be an object in {self.path}")
        existing = scripts.get(key)

        if not existing:
            scripts[key] = command
            return True
        if command in existing:
            return False

        scripts[key] = f"{existing} && {command}"
        return True

    def save(self) -> None:
        """Write the manifest back with 2-space indentation."""
        text = json.dumps(self.data, indent=2, ensure_ascii=False)
        if self.trailing_newline:
            text += "\n"
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"Could not write {self.path}: {e}") from e
