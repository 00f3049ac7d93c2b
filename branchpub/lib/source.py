"""
Source repository info for commit messages.

The publish branch records where its content was built from. SourceInfo is
read from the repository the publish was started in, before the publish flow
changes into the target directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from branchpub.git.branch import get_commit_sha, get_current_branch
from branchpub.git.repo import get_toplevel

logger = logging.getLogger(__name__)

# Tokens recognized in commit message templates
TOKEN_NAME = "%sourceName%"
TOKEN_COMMIT = "%sourceCommit%"
TOKEN_BRANCH = "%sourceBranch%"


@dataclass(frozen=True)
class SourceInfo:
    """State of the repository the build output came from."""
    commit: str = ""
    branch: str = ""
    name: str = ""


def read_source_info(path: Path) -> SourceInfo:
    """Read SourceInfo from the repository containing path.

    Best-effort: outside a git repository all fields are empty.
    """
    toplevel = get_toplevel(path)
    if toplevel is None:
        logger.warning(f"{path} is not inside a git repository; source info will be empty")
        return SourceInfo()

    return SourceInfo(
        commit=get_commit_sha(path) or "",
        branch=get_current_branch(path) or "",  # detached HEAD has no branch
        name=toplevel.name,
    )


def render_commit_message(template: str, info: SourceInfo) -> str:
    """Substitute source tokens in a commit message template.

    Plain substring replacement of every occurrence; no escaping is done
    because the message is never passed through a shell.

    Example:
        >>> render_commit_message("rev %sourceCommit% on %sourceBranch%",
        ...                       SourceInfo(commit="abc123", branch="main"))
        'rev abc123 on main'
    """
    return (
        template
        .replace(TOKEN_NAME, info.name)
        .replace(TOKEN_COMMIT, info.commit)
        .replace(TOKEN_BRANCH, info.branch)
    )
