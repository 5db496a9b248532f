"""Git branch operations."""

import logging

from commitpilot.git.runner import run_in_repo
from commitpilot.lib.config import RepositoryContext
from commitpilot.lib.types import Failure, FailureKind, Outcome, Success

logger = logging.getLogger(__name__)


def get_current_branch(ctx: RepositoryContext) -> Outcome[str]:
    """Current branch name. Failure on detached HEAD."""
    outcome = run_in_repo(ctx, ["branch", "--show-current"])
    if not outcome.ok:
        return outcome
    branch = outcome.value.strip()
    if not branch:
        return Failure("Not on a branch (detached HEAD)", FailureKind.PROCESS_EXECUTION)
    return Success(branch)


def create_or_switch_branch(ctx: RepositoryContext, name: str) -> Outcome[str]:
    """
    Create branch name and check it out, or check it out if it already exists.

    A failed creation (branch exists, invalid name, ...) always falls through
    to a plain checkout, whose result decides the outcome.
    """
    if not name:
        return Failure("No branch name provided", FailureKind.INVALID_INPUT)

    created = run_in_repo(ctx, ["checkout", "-b", name])
    if created.ok:
        logger.info(f"Created branch {name}")
        return Success(name)
    if created.kind is FailureKind.CONFIGURATION_MISSING:
        return created

    logger.debug(f"checkout -b {name} failed ({created.reason}), switching instead")
    switched = run_in_repo(ctx, ["checkout", name])
    if not switched.ok:
        return switched
    logger.info(f"Switched to existing branch {name}")
    return Success(name)
