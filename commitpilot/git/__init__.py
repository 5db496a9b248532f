"""Git operations for commitpilot.

Every operation takes a RepositoryContext and returns an Outcome:
Success(value) on exit status 0, Failure(reason) otherwise. Callers check
.ok before using .value; no operation raises on git errors.

- Diffs return Success("") on a clean tree.
- Operations refuse to run when the repository path is unset.
- push_with_identity also refuses when the SSH key path is unset.

GitClient binds the same operations to a config source.
"""

from commitpilot.git.runner import (
    CommandResult,
    run_command,
    run_git,
    run_in_repo,
)
from commitpilot.git.diff import (
    get_diff,
    get_staged_diff,
    get_diff_against_ref,
)
from commitpilot.git.commit import (
    stage_all,
    commit,
)
from commitpilot.git.branch import (
    get_current_branch,
    create_or_switch_branch,
)
from commitpilot.git.remote import (
    push_with_identity,
    ssh_command,
)
from commitpilot.git.client import GitClient

__all__ = [
    # runner
    "CommandResult",
    "run_command",
    "run_git",
    "run_in_repo",
    # diff
    "get_diff",
    "get_staged_diff",
    "get_diff_against_ref",
    # commit
    "stage_all",
    "commit",
    # branch
    "get_current_branch",
    "create_or_switch_branch",
    # remote
    "push_with_identity",
    "ssh_command",
    # client
    "GitClient",
]
