"""
GitHub integration helpers for the pull-request workflow.

Provides utilities for interacting with GitHub via the gh CLI, falling back
to plain git where gh is missing or fails.
"""

import logging

from commitpilot.git.branch import create_or_switch_branch
from commitpilot.git.diff import get_diff_against_ref
from commitpilot.git.remote import push_with_identity
from commitpilot.git.runner import run_command, to_outcome
from commitpilot.lib.config import RepositoryContext, load_config
from commitpilot.lib.types import Failure, FailureKind, Outcome, Success

logger = logging.getLogger(__name__)

# Timeout for gh availability checks (seconds)
GH_CHECK_TIMEOUT_SECONDS = 10

SOURCE_GH = "gh"
SOURCE_GIT = "git"

STAGE_CHECKOUT = "checkout"
STAGE_PUSH = "push"
STAGE_PR_CREATE = "PR creation"


def run_gh(ctx: RepositoryContext, args: list[str]) -> Outcome[str]:
    """Run gh inside the configured repository."""
    if not ctx.repository_path:
        return Failure("Repository path not configured", FailureKind.CONFIGURATION_MISSING)
    return to_outcome(run_command(ctx.gh_executable, args, ctx.repository_path))


def get_pr_diff(ctx: RepositoryContext, branch: str | None = None, name_only: bool = False) -> Outcome[str]:
    """Diff of the open PR for branch (or the current branch) as reported by gh."""
    args = ["pr", "diff"]
    if name_only:
        args.append("--name-only")
    if branch:
        args.append(branch)
    return run_gh(ctx, args)


def diff_against_ref_via_forge(
    ctx: RepositoryContext,
    ref: str,
    current_branch: str | None = None,
    name_only: bool = False,
) -> Outcome[str]:
    """
    PR diff from gh, or the three-dot git diff against ref if gh fails.

    Any gh failure (not installed, not authenticated, no PR for the branch)
    triggers the git fallback. The Success.source field says which one
    answered.
    """
    if not ctx.repository_path:
        return Failure("Repository path not configured", FailureKind.CONFIGURATION_MISSING)

    primary = get_pr_diff(ctx, current_branch, name_only=name_only)
    if primary.ok:
        return Success(primary.value, source=SOURCE_GH)

    logger.warning(f"gh pr diff failed ({primary.reason}), falling back to git diff {ref}...HEAD")
    secondary = get_diff_against_ref(ctx, ref, name_only=name_only)
    if not secondary.ok:
        return secondary
    return Success(secondary.value, source=SOURCE_GIT)


def create_pull_request(
    ctx: RepositoryContext,
    branch: str,
    title: str,
    body: str,
    base_branch: str | None = None,
) -> Outcome[str]:
    """
    Create (or switch to) branch, push it, and open a PR from it.

    Stops at the first failing stage; the Failure reason is prefixed with
    the stage name ("checkout", "push", "PR creation").

    Returns: Success(pr_url)
    """
    checkout = create_or_switch_branch(ctx, branch)
    if not checkout.ok:
        return checkout.with_stage(STAGE_CHECKOUT)

    pushed = push_with_identity(ctx)
    if not pushed.ok:
        return pushed.with_stage(STAGE_PUSH)

    args = ["pr", "create", "--title", title, "--body", body, "--head", branch]
    if base_branch:
        args.extend(["--base", base_branch])
    created = run_gh(ctx, args)
    if not created.ok:
        logger.warning(f"gh pr create failed: {created.reason}")
        return created.with_stage(STAGE_PR_CREATE)

    pr_url = created.value.strip()
    logger.info(f"Opened pull request {pr_url}")
    return Success(pr_url)


def check_gh_available(gh_executable: str = "gh") -> tuple[bool, str]:
    """Check gh CLI is installed and authenticated.

    Returns: (ok, error_message)
    """
    result = run_command(gh_executable, ["--version"], ".", timeout=GH_CHECK_TIMEOUT_SECONDS)
    if result.spawn_error is not None:
        return False, "GitHub CLI (gh) not found\n  Install: https://cli.github.com/"
    if result.timed_out:
        return False, "GitHub CLI timed out"
    if not result.success:
        return False, "GitHub CLI (gh) not installed\n  Install: https://cli.github.com/"

    result = run_command(gh_executable, ["auth", "status"], ".", timeout=GH_CHECK_TIMEOUT_SECONDS)
    if result.timed_out:
        return False, "GitHub CLI timed out"
    if not result.success:
        return False, "GitHub CLI not authenticated\n  Run: gh auth login"

    return True, ""


class GitHubClient:
    """gh-backed operations bound to a config source (reloaded per call)."""

    def __init__(self, config):
        self.config = config

    def diff_against_ref(self, ref: str | None = None, current_branch: str | None = None,
                         name_only: bool = False) -> Outcome[str]:
        loaded = load_config(self.config)
        if not loaded.ok:
            return loaded
        config = loaded.value
        return diff_against_ref_via_forge(
            config.repository, ref or config.base_branch, current_branch, name_only=name_only
        )

    def create_pull_request(self, branch: str, title: str, body: str,
                            base_branch: str | None = None) -> Outcome[str]:
        loaded = load_config(self.config)
        if not loaded.ok:
            return loaded
        return create_pull_request(loaded.value.repository, branch, title, body, base_branch)
