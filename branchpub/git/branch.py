"""Git branch operations."""

from pathlib import Path

from branchpub.git.runner import run_git, GitResult


def get_current_branch(worktree: Path) -> str | None:
    """Get the current branch name, or None if detached HEAD."""
    result = run_git(["branch", "--show-current"], worktree)
    if result.success:
        return result.stdout.strip() or None
    return None


def branch_exists(repo: Path, branch: str) -> bool:
    """Check if a local branch exists."""
    result = run_git(["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"], repo)
    return result.success


def get_commit_sha(worktree: Path, ref: str = "HEAD") -> str | None:
    """Get the SHA of a ref."""
    result = run_git(["rev-parse", ref], worktree)
    if result.success:
        return result.stdout.strip()
    return None


def create_orphan_branch(repo: Path, branch: str) -> GitResult:
    """Create a branch with no history and switch to it.

    The working tree is left as is; every file shows up as new.
    """
    return run_git(["checkout", "--orphan", branch], repo)


def clear_index(repo: Path) -> GitResult:
    """Empty the index. Files on disk are left alone."""
    return run_git(["read-tree", "--empty"], repo)


def point_head_at(repo: Path, branch: str) -> GitResult:
    """Make HEAD refer to branch without checking out any files."""
    return run_git(["symbolic-ref", "HEAD", f"refs/heads/{branch}"], repo)


def is_ancestor(worktree: Path, ancestor: str, descendant: str) -> bool:
    """Check if ancestor is an ancestor of descendant."""
    result = run_git(["merge-base", "--is-ancestor", ancestor, descendant], worktree)
    return result.success
