"""Git operations for branchpub.

Thin wrappers around the git binary, one command each.

Return type conventions:
- Functions returning GitResult: Caller must check .success before using output.
  Examples: init_repo(), create_orphan_branch(), create_commit(), fetch(), push_ref()
- Functions returning bool: True on success/condition met, False otherwise.
  Examples: is_repo(), branch_exists(), is_ancestor()
- Functions returning parsed values (str, Path): Return None on failure.
  Examples: get_current_branch() -> None, get_toplevel() -> None
"""

from branchpub.git.runner import (
    GitResult,
    run_git,
)
from branchpub.git.repo import (
    is_repo,
    init_repo,
    get_toplevel,
)
from branchpub.git.branch import (
    get_current_branch,
    branch_exists,
    get_commit_sha,
    create_orphan_branch,
    clear_index,
    point_head_at,
    is_ancestor,
)
from branchpub.git.remote import (
    ls_remote_branch,
    fetch,
    push_ref,
)
from branchpub.git.commit import (
    unstage_all,
    stage_all,
    create_commit,
    commit_empty,
    reset_index_to,
)
from branchpub.git.status import (
    get_status_porcelain,
)

__all__ = [
    # runner
    "GitResult",
    "run_git",
    # repo
    "is_repo",
    "init_repo",
    "get_toplevel",
    # branch
    "get_current_branch",
    "branch_exists",
    "get_commit_sha",
    "create_orphan_branch",
    "clear_index",
    "point_head_at",
    "is_ancestor",
    # remote
    "ls_remote_branch",
    "fetch",
    "push_ref",
    # commit
    "unstage_all",
    "stage_all",
    "create_commit",
    "commit_empty",
    "reset_index_to",
    # status
    "get_status_porcelain",
]
