"""Git remote operations."""

from pathlib import Path

from branchpub.git.runner import run_git, GitResult, NETWORK_TIMEOUT

# `ls-remote --exit-code` exits with 2 when no matching ref was found
LS_REMOTE_NO_MATCH = 2


def ls_remote_branch(repo: Path, remote: str, branch: str) -> GitResult:
    """Look up a branch head on the remote.

    The full ref is passed so that e.g. refs/heads/foo/gh-pages does not
    match gh-pages.
    """
    return run_git(
        ["ls-remote", "--exit-code", "--heads", remote, f"refs/heads/{branch}"],
        repo,
        timeout=NETWORK_TIMEOUT,
    )


def fetch(repo: Path, remote: str, branch: str | None = None) -> GitResult:
    """Fetch from remote. The fetched head is available as FETCH_HEAD."""
    args = ["fetch", remote]
    if branch:
        args.append(branch)
    return run_git(args, repo, timeout=NETWORK_TIMEOUT)


def push_ref(
    worktree: Path,
    remote: str,
    branch: str,
    force: bool = False,
    set_upstream: bool = False,
) -> GitResult:
    """Push HEAD to refs/heads/<branch> on remote."""
    args = ["push"]
    if set_upstream:
        args.append("--set-upstream")
    if force:
        args.append("--force")
    args += [remote, f"HEAD:{branch}"]
    return run_git(args, worktree, timeout=NETWORK_TIMEOUT)
