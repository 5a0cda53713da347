"""
Shared data types for the git helper.

Value objects passed between the workspace locators, the cache and the
sync engine. None of them are persisted except through WorkspaceCache.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkspaceReference:
    """A resolved workspace folder (decoded filesystem path, no URI scheme)."""
    path: str


@dataclass
class GitStatusSummary:
    """Synchronization state of a workspace.

    When is_repository is False every other field keeps its zero value.
    """
    is_repository: bool = False
    branch: str = ""
    changed_file_count: int = 0
    has_unpushed_commits: bool = False

    @property
    def has_uncommitted_changes(self) -> bool:
        return self.changed_file_count > 0


@dataclass
class SyncResult:
    """Outcome of a commit/push attempt."""
    succeeded: bool
    message: str
