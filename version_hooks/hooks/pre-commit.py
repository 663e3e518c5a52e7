#!/usr/bin/env python3
"""Git pre-commit hook: refuse commits while conflict markers remain."""

from pathlib import Path

from version_hooks.main import cli

PROJECT_DIR = Path(__file__).resolve().parent.parent

if __name__ == "__main__":
    cli(["check-conflicts", "--project-dir", str(PROJECT_DIR)], prog_name="pre-commit")
