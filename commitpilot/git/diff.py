"""Git diff operations."""

from commitpilot.git.runner import run_in_repo
from commitpilot.lib.config import RepositoryContext
from commitpilot.lib.types import Failure, FailureKind, Outcome


def get_diff(ctx: RepositoryContext) -> Outcome[str]:
    """Unstaged changes in the working tree. Empty string on a clean tree."""
    return run_in_repo(ctx, ["diff"])


def get_staged_diff(ctx: RepositoryContext) -> Outcome[str]:
    """Changes staged in the index. Empty string when nothing is staged."""
    return run_in_repo(ctx, ["diff", "--staged"])


def get_diff_against_ref(ctx: RepositoryContext, ref: str, name_only: bool = False) -> Outcome[str]:
    """
    Changes on HEAD since it diverged from ref.

    Uses the three-dot form (ref...HEAD), i.e. relative to the merge base,
    which is what a pull request from HEAD into ref would contain.
    """
    if not ref:
        return Failure("No base ref provided", FailureKind.INVALID_INPUT)
    args = ["diff"]
    if name_only:
        args.append("--name-only")
    args.append(f"{ref}...HEAD")
    return run_in_repo(ctx, args)
