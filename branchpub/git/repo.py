"""Git repository operations."""

from pathlib import Path

from branchpub.git.runner import run_git, GitResult


def is_repo(path: Path) -> bool:
    """Check if path is the root of a git repository (has its own .git)."""
    return (path / ".git").exists()


def init_repo(path: Path) -> GitResult:
    """Initialize a git repository at path."""
    return run_git(["init"], path)


def get_toplevel(path: Path) -> Path | None:
    """Get the top-level directory of the repository containing path."""
    result = run_git(["rev-parse", "--show-toplevel"], path)
    if result.success and result.stdout.strip():
        return Path(result.stdout.strip())
    return None
