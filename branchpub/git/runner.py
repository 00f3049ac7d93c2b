"""Runs the git binary for the publish steps.

Every helper in branchpub.git goes through run_git(). Failures come back as
a GitResult, never as an exception, so the publish steps decide which
failures are fatal.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

# fetch/push/ls-remote talk to the remote
NETWORK_TIMEOUT = 120

# A publish run is unattended: fail instead of waiting on a credential prompt
GIT_ENV_OVERRIDES = {"GIT_TERMINAL_PROMPT": "0"}


@dataclass
class GitResult:
    """Exit status and captured streams of one git command."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Combined stdout/stderr, for error messages."""
        return "\n".join(part.strip() for part in (self.stdout, self.stderr) if part.strip())


def _git_env() -> dict[str, str]:
    env = dict(os.environ)
    env.update(GIT_ENV_OVERRIDES)
    return env


def run_git(args: list[str], cwd: Path, timeout: int = DEFAULT_TIMEOUT) -> GitResult:
    """
    Run `git -C cwd <args>` and capture its output.

    The arguments are handed to git as an argv list; a commit message with
    quotes or shell metacharacters reaches git unchanged.

    Args:
        args: Git arguments, e.g. ["push", "origin", "HEAD:gh-pages"]
        cwd: Repository the command runs against
        timeout: Seconds before the command is abandoned

    Returns:
        GitResult; a timeout or a missing git binary is a failed result
    """
    logger.debug(f"git {' '.join(args)} (in {cwd})")
    try:
        proc = subprocess.run(
            ["git", "-C", str(cwd), *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            env=_git_env(),
        )
    except subprocess.TimeoutExpired:
        logger.debug(f"git {args[0]} timed out after {timeout}s")
        return GitResult(returncode=-1, stdout="", stderr=f"git {args[0]} timed out after {timeout}s", timed_out=True)
    except FileNotFoundError:
        return GitResult(returncode=127, stdout="", stderr="git executable not found")

    if proc.returncode != 0:
        logger.debug(f"git {args[0]} exited {proc.returncode}")
    return GitResult(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
