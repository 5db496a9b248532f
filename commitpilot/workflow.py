"""
Multi-step flows built from git, gh and generation operations.

Each flow stops at the first failing step and prefixes the Failure reason
with that step's name, e.g. "push failed: SSH key path not configured".
"""

import logging

from commitpilot.git.client import GitClient
from commitpilot.lib.github import GitHubClient
from commitpilot.lib.types import Failure, FailureKind, GeneratedSummary, Outcome, Success
from commitpilot.llm.client import GenerationClient

logger = logging.getLogger(__name__)


def prepare_push(git: GitClient) -> Outcome[str]:
    """Stage everything and return the staged diff (may be empty)."""
    staged = git.stage_all()
    if not staged.ok:
        return staged.with_stage("stage")

    diff = git.staged_diff()
    if not diff.ok:
        return diff.with_stage("staged diff")
    return diff


def commit_staged(git: GitClient, summary: GeneratedSummary) -> Outcome[str]:
    """Commit the index with the summary as subject and body, without pushing."""
    committed = git.commit(summary.title, summary.message)
    if not committed.ok:
        return committed.with_stage("commit")
    return committed


def commit_and_push(git: GitClient, summary: GeneratedSummary) -> Outcome[str]:
    """Commit the index with the summary, then push. Returns the branch pushed."""
    committed = commit_staged(git, summary)
    if not committed.ok:
        return committed

    pushed = git.push_with_identity()
    if not pushed.ok:
        return pushed.with_stage("push")
    return pushed


def summarize_diff(generator: GenerationClient, diff: Outcome[str]) -> Outcome[GeneratedSummary]:
    """Generate a summary for a diff outcome, passing diff failures through."""
    if not diff.ok:
        return diff.with_stage("diff")

    summary = generator.generate_summary(diff.value)
    if not summary.ok:
        return summary.with_stage("summary")
    return summary


def summarize_pull_request(
    github: GitHubClient,
    generator: GenerationClient,
    base_branch: str | None = None,
    branch: str | None = None,
) -> Outcome[GeneratedSummary]:
    """Summarize what a PR from branch (default: HEAD) into base_branch would contain."""
    diff = github.diff_against_ref(base_branch, current_branch=branch)
    if diff.ok:
        logger.debug(f"PR diff from {diff.source}: {len(diff.value)} characters")
    return summarize_diff(generator, diff)


def open_pull_request(
    github: GitHubClient,
    generator: GenerationClient,
    branch: str,
    base_branch: str | None = None,
    title: str | None = None,
    body: str | None = None,
) -> Outcome[str]:
    """
    Open a PR for branch, generating title and body unless both are given.

    Returns: Success(pr_url)
    """
    if title is None or body is None:
        summary = summarize_pull_request(github, generator, base_branch)
        if not summary.ok:
            return summary
        title = summary.value.title if title is None else title
        body = summary.value.message if body is None else body

    return github.create_pull_request(branch, title, body, base_branch)


def check_enabled(config) -> Outcome[None]:
    """Failure when the user has switched commitpilot off in settings."""
    if not config.enabled:
        return Failure("commitpilot is disabled (run: commitpilot config set ENABLED true)", FailureKind.DISABLED)
    return Success(None)
