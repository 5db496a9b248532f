"""Git staging and commit operations."""

import logging

from commitpilot.git.runner import run_in_repo
from commitpilot.lib.config import RepositoryContext
from commitpilot.lib.types import Outcome

logger = logging.getLogger(__name__)


def stage_all(ctx: RepositoryContext) -> Outcome[str]:
    """Stage the whole working tree (git add .). Safe to repeat."""
    outcome = run_in_repo(ctx, ["add", "."])
    if outcome.ok:
        logger.info("Staged all changes")
    else:
        logger.warning(f"git add failed: {outcome.reason}")
    return outcome


def commit(ctx: RepositoryContext, title: str, message: str) -> Outcome[str]:
    """
    Commit the index with title as subject and message as body.

    Two -m flags make git separate subject and body with a blank line.
    An empty index is not special-cased: git's own failure is returned.
    """
    outcome = run_in_repo(ctx, ["commit", "-m", title, "-m", message])
    if outcome.ok:
        logger.info(f"Committed: {title}")
    else:
        logger.warning(f"git commit failed: {outcome.reason}")
    return outcome
