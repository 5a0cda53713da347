"""Git commit operations."""

from pathlib import Path

from githelper.git.runner import run_git, GitResult, DEFAULT_TIMEOUT


def stage_all(worktree: Path, timeout: int = DEFAULT_TIMEOUT) -> GitResult:
    """Stage all changes (new, modified, deleted)."""
    return run_git(["add", "-A"], worktree, timeout=timeout)


def commit(worktree: Path, message: str, timeout: int = DEFAULT_TIMEOUT) -> GitResult:
    """Create a commit with the given message."""
    return run_git(["commit", "-m", message], worktree, timeout=timeout)
