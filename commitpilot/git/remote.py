"""Git remote operations."""

import logging
import shlex

from commitpilot.git.branch import get_current_branch
from commitpilot.git.runner import run_in_repo
from commitpilot.lib.config import RepositoryContext
from commitpilot.lib.types import Failure, FailureKind, Outcome, Success

logger = logging.getLogger(__name__)

REMOTE = "origin"


def ssh_command(key_path: str) -> str:
    """GIT_SSH_COMMAND value that forces a single identity file."""
    return f"ssh -i {shlex.quote(key_path)} -o IdentitiesOnly=yes"


def push_with_identity(ctx: RepositoryContext) -> Outcome[str]:
    """
    Push the current branch to origin with upstream tracking.

    The SSH key from config is forced via GIT_SSH_COMMAND with
    IdentitiesOnly=yes, so keys loaded in an agent are never offered.
    Returns the pushed branch name.
    """
    if not ctx.repository_path:
        return Failure("Repository path not configured", FailureKind.CONFIGURATION_MISSING)
    if not ctx.ssh_key_path:
        return Failure("SSH key path not configured", FailureKind.CONFIGURATION_MISSING)

    branch = get_current_branch(ctx)
    if not branch.ok:
        return branch

    env = {"GIT_SSH_COMMAND": ssh_command(ctx.ssh_key_path)}
    outcome = run_in_repo(ctx, ["push", "-u", REMOTE, branch.value], env_overrides=env)
    if not outcome.ok:
        logger.warning(f"git push failed: {outcome.reason}")
        return outcome

    logger.info(f"Pushed {branch.value} to {REMOTE}")
    return Success(branch.value)
