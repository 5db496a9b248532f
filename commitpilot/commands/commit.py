"""
commitpilot commit - Stage everything and commit with a generated message.

Same as push but stops after the local commit; no SSH key is needed.
"""

from commitpilot.commands.push import confirm, stage_and_summarize
from commitpilot.git.client import GitClient
from commitpilot.lib.config import ConfigStore
from commitpilot.workflow import commit_staged


def cmd_commit(args, store: ConfigStore) -> int:
    git = GitClient(store)

    code, summary = stage_and_summarize(git, store)
    if summary is None:
        return code

    if not args.yes and not confirm("Commit?"):
        print("Aborted. Changes remain staged.")
        return 0

    committed = commit_staged(git, summary)
    if not committed.ok:
        print(f"ERROR: {committed.reason}")
        return 1

    print(f"Committed: {summary.title}")
    return 0
