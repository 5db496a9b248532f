"""
GitClient: the git operations bound to a config source.

Every method reloads configuration before running, so changes to the
repository path or SSH key apply on the next call. A settings file that
cannot be read turns into a CONFIGURATION_MISSING Failure.
"""

from commitpilot.git.branch import create_or_switch_branch, get_current_branch
from commitpilot.git.commit import commit as git_commit, stage_all
from commitpilot.git.diff import get_diff, get_diff_against_ref, get_staged_diff
from commitpilot.git.remote import push_with_identity
from commitpilot.lib.config import load_config
from commitpilot.lib.types import Outcome


class GitClient:
    def __init__(self, config):
        self.config = config

    def _run(self, operation, *args, **kwargs) -> Outcome:
        loaded = load_config(self.config)
        if not loaded.ok:
            return loaded
        return operation(loaded.value.repository, *args, **kwargs)

    def diff(self) -> Outcome[str]:
        return self._run(get_diff)

    def staged_diff(self) -> Outcome[str]:
        return self._run(get_staged_diff)

    def diff_against_ref(self, ref: str, name_only: bool = False) -> Outcome[str]:
        return self._run(get_diff_against_ref, ref, name_only=name_only)

    def stage_all(self) -> Outcome[str]:
        return self._run(stage_all)

    def commit(self, title: str, message: str) -> Outcome[str]:
        return self._run(git_commit, title, message)

    def push_with_identity(self) -> Outcome[str]:
        return self._run(push_with_identity)

    def current_branch(self) -> Outcome[str]:
        return self._run(get_current_branch)

    def create_or_switch_branch(self, name: str) -> Outcome[str]:
        return self._run(create_or_switch_branch, name)
