"""
Git synchronization engine.

Bound to one workspace for its lifetime. Every query re-reads repository
state from git; nothing is cached or persisted here.

Failure policy:
- Repository probes that fail are logged and read as "not a repository".
- commit_and_push() never raises; any failure from staging onwards becomes
  SyncResult(succeeded=False). A commit that succeeds before a failed push
  is kept, not rolled back.
"""

import logging
from pathlib import Path
from typing import Optional

from githelper import git
from githelper.lib.config import Settings
from githelper.lib.paths import normalize
from githelper.lib.types import GitStatusSummary, SyncResult

logger = logging.getLogger(__name__)

# Display order for change descriptions
CHANGE_CATEGORIES = (
    ("created", "Created"),
    ("modified", "Modified"),
    ("deleted", "Deleted"),
    ("renamed", "Renamed"),
    ("untracked", "Untracked"),
)


class GitStepError(Exception):
    """A git command in the commit/push sequence failed."""

    def __init__(self, step: str, result: git.GitResult):
        self.step = step
        self.result = result
        super().__init__(f"git {step} failed: {result.error_text}")


def _check(step: str, result: git.GitResult) -> None:
    if not result.success:
        raise GitStepError(step, result)


def describe_changes(status: git.WorkingTreeStatus) -> str:
    """Summarize changes per category, e.g. "Created: 2 files, Modified: 1 file"."""
    parts = []
    for attr, label in CHANGE_CATEGORIES:
        count = len(getattr(status, attr))
        if count:
            parts.append(f"{label}: {count} file{'s' if count != 1 else ''}")
    return ", ".join(parts)


class GitSyncEngine:
    """Status queries and auto commit/push for a single workspace."""

    def __init__(self, workspace_path: str, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.workspace_path = normalize(workspace_path) if workspace_path else ""
        self.worktree: Optional[Path] = Path(self.workspace_path) if self.workspace_path else None

    def is_repository(self) -> bool:
        """True if the workspace root has a .git entry and git agrees it is a work tree."""
        if self.worktree is None:
            return False
        if not (self.worktree / ".git").exists():
            return False
        try:
            return git.is_inside_work_tree(self.worktree, timeout=self.settings.git_timeout)
        except OSError as e:
            logger.error(f"Failed to probe git repository at {self.worktree}: {e}")
            return False

    def _working_tree_status(self) -> Optional[git.WorkingTreeStatus]:
        status = git.get_working_tree_status(self.worktree, timeout=self.settings.git_timeout)
        if status is None:
            logger.error(f"git status failed in {self.worktree}")
        return status

    def get_status(self) -> GitStatusSummary:
        """Summarize branch, change count and unpushed state."""
        if not self.is_repository():
            return GitStatusSummary()

        try:
            status = self._working_tree_status()
            if status is None:
                return GitStatusSummary()

            branch = git.get_current_branch(self.worktree, timeout=self.settings.git_timeout) or ""
            return GitStatusSummary(
                is_repository=True,
                branch=branch,
                changed_file_count=status.changed_count,
                has_unpushed_commits=self._has_unpushed_commits(branch),
            )
        except OSError as e:
            logger.error(f"Failed to get git status: {e}")
            return GitStatusSummary()

    def has_unpushed_commits(self) -> bool:
        """True if the current branch has commits the first remote lacks."""
        if not self.is_repository():
            return False
        try:
            branch = git.get_current_branch(self.worktree, timeout=self.settings.git_timeout) or ""
            return self._has_unpushed_commits(branch)
        except OSError as e:
            logger.error(f"Failed to check unpushed commits: {e}")
            return False

    def _has_unpushed_commits(self, branch: str) -> bool:
        timeout = self.settings.git_timeout
        if not branch:
            return False

        remotes = git.get_remotes(self.worktree, timeout=timeout)
        if not remotes:
            return False

        tracking_ref = f"refs/remotes/{remotes[0]}/{branch}"
        if not git.ref_exists(self.worktree, tracking_ref, timeout=timeout):
            # Never pushed: the whole branch is unpushed work
            return True

        count = git.get_commit_count(self.worktree, f"{tracking_ref}..refs/heads/{branch}", timeout=timeout)
        return count > 0

    def get_changes_description(self) -> str:
        """Human-readable per-category change counts, '' on any failure."""
        if self.worktree is None:
            return ""
        try:
            status = self._working_tree_status()
        except OSError as e:
            logger.error(f"Failed to describe changes: {e}")
            return ""
        return describe_changes(status) if status else ""

    def commit_and_push(self) -> SyncResult:
        """Stage everything, commit with an auto-generated message, push to the first remote."""
        if self.worktree is None:
            return SyncResult(False, "Git helper is not initialized")

        timeout = self.settings.git_timeout
        try:
            if not self.is_repository():
                return SyncResult(False, "Current directory is not a Git repository")

            status = self._working_tree_status()
            if status is None or status.changed_count == 0:
                return SyncResult(False, "No changes to commit")

            commit_message = (
                f"{self.settings.commit_prefix}: {describe_changes(status)} "
                f"{self.settings.commit_marker}"
            )

            _check("add", git.stage_all(self.worktree, timeout=timeout))
            _check("commit", git.commit(self.worktree, commit_message, timeout=timeout))
            logger.info(f"Committed in {self.worktree}: {commit_message}")

            remotes = git.get_remotes(self.worktree, timeout=timeout)
            if not remotes:
                return SyncResult(
                    True, "Committed changes, but no remote repository is configured; not pushed"
                )

            branch = git.get_current_branch(self.worktree, timeout=timeout)
            if not branch:
                return SyncResult(
                    True, "Committed changes, but the current branch could not be determined; not pushed"
                )

            _check("push", git.push(self.worktree, remotes[0], branch, timeout=self.settings.push_timeout))
            logger.info(f"Pushed {branch} to {remotes[0]}")

            return SyncResult(True, f"Committed and pushed changes: {commit_message}")
        except (GitStepError, OSError) as e:
            logger.error(f"Commit and push failed in {self.worktree}: {e}")
            return SyncResult(False, f"Commit and push failed: {e}")
