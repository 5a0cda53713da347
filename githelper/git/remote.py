"""Git remote operations."""

from pathlib import Path

from githelper.git.runner import run_git, GitResult, DEFAULT_TIMEOUT, PUSH_TIMEOUT


def get_remotes(repo: Path, timeout: int = DEFAULT_TIMEOUT) -> list[str]:
    """List configured remote names, in the order git reports them."""
    result = run_git(["remote"], repo, timeout=timeout)
    if not result.success:
        return []
    return [r.strip() for r in result.stdout.splitlines() if r.strip()]


def push(worktree: Path, remote: str, branch: str, timeout: int = PUSH_TIMEOUT) -> GitResult:
    """Push a branch to a remote."""
    return run_git(["push", remote, branch], worktree, timeout=timeout)
