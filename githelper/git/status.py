"""Git status operations."""

from dataclasses import dataclass, field
from pathlib import Path

from githelper.git.runner import run_git, DEFAULT_TIMEOUT


@dataclass
class WorkingTreeStatus:
    """Working-tree changes, one category per path."""
    created: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)

    @property
    def changed_count(self) -> int:
        return (
            len(self.created)
            + len(self.deleted)
            + len(self.modified)
            + len(self.renamed)
            + len(self.untracked)
        )


def classify_status(code: str) -> str:
    """Map a porcelain XY code to a single category name."""
    index, worktree = code[0], code[1]
    if code == "??":
        return "untracked"
    if "R" in (index, worktree):
        return "renamed"
    if index in ("A", "C"):
        return "created"
    if "D" in (index, worktree):
        return "deleted"
    return "modified"


def parse_status_porcelain(output: str) -> WorkingTreeStatus:
    """Parse `git status --porcelain -z` output.

    -z format: "XY path\\0". Renames and copies, in either column, carry
    the original path as an extra NUL-separated entry.
    """
    status = WorkingTreeStatus()
    entries = output.split('\0')
    i = 0
    while i < len(entries):
        entry = entries[i]
        if len(entry) < 4:
            i += 1
            continue

        code = entry[:2]
        path = entry[3:]
        if code[0] == '!':
            # Ignored files only show up with --ignored
            i += 1
            continue

        getattr(status, classify_status(code)).append(path)

        if 'R' in code or 'C' in code:
            i += 2
        else:
            i += 1

    return status


def get_working_tree_status(worktree: Path, timeout: int = DEFAULT_TIMEOUT) -> WorkingTreeStatus | None:
    """Get classified working-tree status, or None if git failed."""
    result = run_git(["status", "--porcelain", "-z", "--untracked-files=all"], worktree, timeout=timeout)
    if not result.success:
        return None
    return parse_status_porcelain(result.stdout)


def is_inside_work_tree(worktree: Path, timeout: int = DEFAULT_TIMEOUT) -> bool:
    """Probe git for a valid working tree at this path."""
    result = run_git(["rev-parse", "--is-inside-work-tree"], worktree, timeout=timeout)
    return result.success and result.stdout.strip() == "true"
