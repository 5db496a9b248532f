"""
commitpilot diff - Show working tree, staged, or branch diff.
"""

from commitpilot.git.client import GitClient
from commitpilot.lib.config import ConfigStore
from commitpilot.lib.github import GitHubClient
from commitpilot.lib.types import Outcome


def select_diff(args, store: ConfigStore) -> Outcome[str]:
    """Run the diff the command-line flags ask for."""
    against = getattr(args, "against", None)
    if against and getattr(args, "via_gh", False):
        return GitHubClient(store).diff_against_ref(against)
    git = GitClient(store)
    if against:
        return git.diff_against_ref(against)
    if getattr(args, "staged", False):
        return git.staged_diff()
    return git.diff()


def cmd_diff(args, store: ConfigStore) -> int:
    """Print a diff."""
    outcome = select_diff(args, store)
    if not outcome.ok:
        print(f"ERROR: git diff failed: {outcome.reason}")
        return 1

    if outcome.value.strip():
        print(outcome.value, end="")
    elif args.against:
        print(f"No changes since {args.against}")
    elif args.staged:
        print("No staged changes")
    else:
        print("No uncommitted changes")
    return 0
