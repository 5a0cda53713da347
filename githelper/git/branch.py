"""Git branch operations."""

from pathlib import Path

from githelper.git.runner import run_git, DEFAULT_TIMEOUT


def get_current_branch(worktree: Path, timeout: int = DEFAULT_TIMEOUT) -> str | None:
    """Get the current branch name, or None if detached HEAD."""
    result = run_git(["branch", "--show-current"], worktree, timeout=timeout)
    if result.success:
        return result.stdout.strip() or None
    return None


def ref_exists(worktree: Path, ref: str, timeout: int = DEFAULT_TIMEOUT) -> bool:
    """Check if a fully qualified ref (e.g. refs/remotes/origin/main) exists."""
    result = run_git(["rev-parse", "--verify", "--quiet", ref], worktree, timeout=timeout)
    return result.success


def get_commit_count(worktree: Path, ref_range: str, timeout: int = DEFAULT_TIMEOUT) -> int:
    """
    Get number of commits in a range.

    Args:
        worktree: Path to worktree
        ref_range: Git ref range (e.g., "origin/main..main" or "HEAD")

    Returns:
        Number of commits, or 0 on error
    """
    result = run_git(["rev-list", "--count", ref_range], worktree, timeout=timeout)
    if result.success:
        try:
            return int(result.stdout.strip())
        except ValueError:
            pass
    return 0
