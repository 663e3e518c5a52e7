"""
Branch name parsing.

Release work happens on branches named after the version they ship:
``v1.2.3`` for tag branches and ``d1.2.3`` for version (development) branches.
"""

import re
from dataclasses import dataclass

TAG_PATTERN = re.compile(r"^v(\d+\.\d+\.\d+)$")
VERSION_BRANCH_PATTERN = re.compile(r"^d(\d+\.\d+\.\d+)$")

DEFAULT_MASTER_BRANCH = "master"


@dataclass
class BranchInfo:
    """Metadata derived from the current branch name."""

    name: str
    version: str | None = None
    is_tag: bool = False
    is_version_branch: bool = False
    is_master: bool = False

    @property
    def is_valid(self) -> bool:
        """Whether pushes from this branch are allowed at all."""
        return self.is_tag or self.is_version_branch or self.is_master


def parse_branch(name: str, master_branch: str = DEFAULT_MASTER_BRANCH) -> BranchInfo:
    """Classify a branch name and extract its version, if it carries one."""
    name = name.strip()

    match = TAG_PATTERN.match(name)
    if match:
        return BranchInfo(name=name, version=match.group(1), is_tag=True)

    match = VERSION_BRANCH_PATTERN.match(name)
    if match:
        return BranchInfo(name=name, version=match.group(1), is_version_branch=True)

    return BranchInfo(name=name, is_master=name == master_branch)
