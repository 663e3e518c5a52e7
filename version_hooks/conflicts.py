"""
Pre-commit check for unresolved merge conflicts.

Fails the commit when any tracked file still contains conflict markers.
"""

from rich.console import Console

from .git_ops import GitRepository, GrepMatch

console = Console()


def find_conflicts(repo: GitRepository) -> list[GrepMatch]:
    """Return every conflict marker line in the tracked files."""
    return repo.grep_conflict_markers()


def check_conflicts(repo: GitRepository) -> int:
    """
    Report conflict markers and return the hook's exit code.

    Returns:
        1 if any tracked file contains a conflict marker, 0 otherwise
    """
    matches = find_conflicts(repo)

    if not matches:
        console.print("[green]No conflicts found, ready to commit.[/green]")
        return 0

    console.print("[red]Conflicts found, resolve them before committing. Conflicting files:[/red]")
    for match in matches:
        console.print(f"{match.path}:{match.line}: {match.text}", markup=False, highlight=False)
    return 1
