"""Git operations for the git helper.

Return type conventions:
- Functions returning GitResult: Caller must check .success before using output.
  Examples: stage_all(), commit(), push()
- Functions returning bool: True on success/condition met, False otherwise.
  Examples: ref_exists(), is_inside_work_tree()
- Functions returning parsed values (str, int, list): Return empty/zero/None on failure.
  Examples: get_remotes() -> [], get_commit_count() -> 0
"""

from githelper.git.runner import GitResult, run_git
from githelper.git.status import (
    WorkingTreeStatus,
    classify_status,
    parse_status_porcelain,
    get_working_tree_status,
    is_inside_work_tree,
)
from githelper.git.branch import (
    get_current_branch,
    ref_exists,
    get_commit_count,
)
from githelper.git.commit import (
    stage_all,
    commit,
)
from githelper.git.remote import (
    get_remotes,
    push,
)

__all__ = [
    # runner
    "GitResult",
    "run_git",
    # status
    "WorkingTreeStatus",
    "classify_status",
    "parse_status_porcelain",
    "get_working_tree_status",
    "is_inside_work_tree",
    # branch
    "get_current_branch",
    "ref_exists",
    "get_commit_count",
    # commit
    "stage_all",
    "commit",
    # remote
    "get_remotes",
    "push",
]
