#!/usr/bin/env python3
"""
Git pre-push hook: check the branch name and sync package.json before pushing.

Options (e.g. from the npm script) are passed through:

    python ./hooks/pre-push.py --cn --cv --tagpush "npm run build"

Git itself calls pre-push with the remote name and URL; those are ignored.
"""

import sys
from pathlib import Path

from version_hooks.main import cli

PROJECT_DIR = Path(__file__).resolve().parent.parent

if __name__ == "__main__":
    options = list(sys.argv[1:])
    # git passes "<remote> <url>" positionally, option values follow their flag
    if options and not options[0].startswith("-"):
        options = []
    cli(["pre-push", "--project-dir", str(PROJECT_DIR), *options], prog_name="pre-push")
