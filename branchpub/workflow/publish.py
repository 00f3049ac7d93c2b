"""Publish flow: mirror a directory onto a branch with independent history.

Steps run in strict order, each a precondition for the next:

    requirements -> enter dir -> init repo -> init branch -> sync
                 -> [commit] -> [push]

Each step returns normally on success and raises a PublishError on failure.
publish() runs the steps, stops at the first failure, always returns to the
original working directory, and reports the outcome exactly once.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from branchpub.git import (
    branch_exists,
    clear_index,
    commit_empty,
    create_commit,
    create_orphan_branch,
    fetch,
    get_current_branch,
    get_status_porcelain,
    init_repo,
    is_ancestor,
    is_repo,
    ls_remote_branch,
    point_head_at,
    push_ref,
    reset_index_to,
    stage_all,
    unstage_all,
)
from branchpub.git.remote import LS_REMOTE_NO_MATCH
from branchpub.lib.config import PublishConfig
from branchpub.lib.errors import (
    ConfigurationError,
    FilesystemError,
    PublishError,
    VcsCommandError,
)
from branchpub.lib.source import SourceInfo, read_source_info, render_commit_message
from branchpub.lib.workdir import working_directory
from branchpub.workflow.fsm import PublishFSM

logger = logging.getLogger(__name__)

BOOTSTRAP_COMMIT_MSG = "Initial Commit."


@dataclass
class PublishResult:
    """Outcome of one publish run."""
    success: bool = False
    state: str = "start"  # final FSM state: "done" or "failed"
    error: Optional[Exception] = None
    bootstrapped: bool = False  # an empty initial commit was created and pushed
    committed: bool = False  # a commit with build output was created
    pushed: bool = False
    history: list[tuple[str, str, str]] = field(default_factory=list)


def check_requirements(config: PublishConfig) -> None:
    """Check required options and make sure the target directory exists.

    Stops at the first missing option. Creates the target directory
    (with parents) when it doesn't exist.
    """
    missing = config.missing_options()
    if missing:
        raise ConfigurationError(missing[0], f'The "{missing[0]}" option is required.')

    if not config.commit_msg:
        raise ConfigurationError("commitMsg", 'The "commitMsg" option must not be empty.')

    target = Path(config.dir)
    if target.exists() and not target.is_dir():
        raise FilesystemError(str(target), f'The target "{target}" exists but is not a directory.')

    if not target.is_dir():
        logger.info(f'The target directory "{target}" doesn\'t exist. Creating it.')
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(
                str(target), f'Unable to create the target directory "{target}": {e}'
            ) from e


def init_repository(repo: Path) -> None:
    """Initialize a git repo in the target directory if there isn't one."""
    if is_repo(repo):
        return

    logger.info("Creating local git repo.")
    result = init_repo(repo)
    if not result.success:
        raise VcsCommandError("init", "Could not initialize the local git repo.", result.output)


def init_branch(repo: Path, branch: str, remote: str) -> bool:
    """Create the publish branch as an orphan if it doesn't exist locally.

    When the remote has no such branch either, an empty initial commit is
    created and pushed so the branch has a valid ref to sync against.

    Returns:
        True if the initial commit was created and pushed.
    """
    if branch_exists(repo, branch):
        return False

    result = create_orphan_branch(repo, branch)
    if not result.success:
        raise VcsCommandError("branch", f"Could not create branch {branch}.", result.output)

    logger.info("Checking to see if the branch exists remotely...")
    probe = ls_remote_branch(repo, remote, branch)
    if probe.success:
        logger.info("Remote branch exists.")
        return False
    if probe.returncode != LS_REMOTE_NO_MATCH:
        logger.warning(f"Could not query remote {remote}, assuming no branch {branch}: {probe.output}")

    logger.info("Remote branch does not exist. Adding an initial commit.")
    # checkout --orphan keeps the previous branch's index
    result = clear_index(repo)
    if not result.success:
        raise VcsCommandError("branch", "Could not clear the index for the initial commit.", result.output)

    result = commit_empty(repo, BOOTSTRAP_COMMIT_MSG)
    if not result.success:
        raise VcsCommandError("branch", "Could not create an initial commit.", result.output)

    result = push_ref(repo, remote, branch, set_upstream=True)
    if not result.success:
        raise VcsCommandError("branch", "Could not push initial branch.", result.output)

    return True


def sync_branch(repo: Path, branch: str, remote: str) -> None:
    """Make the remote branch head the local branch head without checking out files.

    HEAD and the index move to the remote state; the build output on disk is
    left alone, so it shows up as the difference to commit. A local branch
    that already contains the remote head (e.g. unpushed commits from an
    earlier run) is left where it is.
    """
    logger.info("Pulling latest from remote.")

    if get_current_branch(repo) != branch:
        result = point_head_at(repo, branch)
        if not result.success:
            raise VcsCommandError("sync", f"Could not switch HEAD to {branch}.", result.output)

    result = fetch(repo, remote, branch)
    if not result.success:
        raise VcsCommandError("sync", "Could not pull local branch.", result.output)

    if is_ancestor(repo, "FETCH_HEAD", "HEAD"):
        logger.debug(f"{branch} already contains {remote}/{branch}")
        return

    result = reset_index_to(repo, "FETCH_HEAD")
    if not result.success:
        raise VcsCommandError("sync", "Could not pull local branch.", result.output)


def commit_changes(repo: Path, branch: str, commit_msg: str, source: SourceInfo) -> bool:
    """Stage and commit everything in the target directory, if anything changed.

    Returns:
        True if a commit was created, False if there was nothing to commit.
    """
    # Unstage any changes, just in case
    result = unstage_all(repo)
    if not result.success:
        logger.warning(f"Could not unstage local changes: {result.output}")

    status = get_status_porcelain(repo)
    if not status.success:
        raise VcsCommandError("commit", "Could not execute git status.", status.output)

    if not status.stdout.strip():
        logger.info("There have been no changes, skipping commit.")
        return False

    changed = len(status.stdout.strip().splitlines())
    message = render_commit_message(commit_msg, source)

    result = stage_all(repo)
    if not result.success:
        raise VcsCommandError("commit", "Unable to stage changes.", result.output)

    result = create_commit(repo, message)
    if not result.success:
        raise VcsCommandError("commit", "Unable to commit changes locally.", result.output)

    logger.info(f'Committed changes to branch "{branch}" ({changed} paths).')
    return True


def push_branch(repo: Path, branch: str, remote: str, force: bool = False) -> None:
    """Push HEAD to the publish branch on the remote."""
    result = push_ref(repo, remote, branch, force=force)
    if not result.success:
        raise VcsCommandError("push", "Unable to push changes to remote.", result.output)

    logger.info(f"Pushed {branch} to {remote}")


def _run_steps(
    config: PublishConfig,
    fsm: PublishFSM,
    outcome: PublishResult,
    source: Optional[SourceInfo],
) -> None:
    """Run every step in order, advancing the FSM after each one."""
    source_dir = Path(os.getcwd())

    check_requirements(config)
    fsm.check_passed()

    target = Path(config.dir).resolve()
    with working_directory(target):
        fsm.enter_directory()

        init_repository(target)
        fsm.repo_ready()

        outcome.bootstrapped = init_branch(target, config.branch, config.remote)
        fsm.branch_ready()

        sync_branch(target, config.branch, config.remote)
        fsm.sync_done()

        if not config.commit and not config.push:
            fsm.finish()
            return

        # Pushing without committing would push nothing new
        if source is None:
            source = read_source_info(source_dir)
        outcome.committed = commit_changes(target, config.branch, config.commit_msg, source)
        fsm.commit_done()

        if not config.push:
            fsm.finish()
            return

        push_branch(target, config.branch, config.remote, force=config.force)
        outcome.pushed = True
        fsm.push_done()
        fsm.finish()


def publish(
    config: PublishConfig,
    done: Optional[Callable[[bool], None]] = None,
    source: Optional[SourceInfo] = None,
) -> PublishResult:
    """Publish config.dir to config.branch.

    Args:
        config: Publish options
        done: Optional completion callback; called exactly once with the
            success flag, after the working directory has been restored
        source: Source info for the commit message. Read from the repository
            in the current working directory when not given.

    Returns:
        PublishResult describing the run
    """
    fsm = PublishFSM(config.branch or "")
    outcome = PublishResult()

    try:
        _run_steps(config, fsm, outcome, source)
        outcome.success = True
    except PublishError as e:
        outcome.error = e
        logger.error(f"Publish failed: {e}")
        if isinstance(e, VcsCommandError) and e.output:
            logger.error(e.output)
        fsm.fail()
    except Exception as e:
        outcome.error = e
        logger.exception(f"Unexpected error while publishing: {e}")
        fsm.fail()

    outcome.state = fsm.state
    outcome.history = list(fsm.history)

    if done is not None:
        done(outcome.success)
    return outcome
