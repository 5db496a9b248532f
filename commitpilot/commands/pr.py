"""
commitpilot pr - Push a branch and open a GitHub pull request for it.
"""

from commitpilot.lib.config import ConfigStore
from commitpilot.lib.github import GitHubClient
from commitpilot.llm.client import GenerationClient
from commitpilot.workflow import open_pull_request


def cmd_pr(args, store: ConfigStore) -> int:
    base = args.base or store.load().base_branch
    if args.title is None or args.body is None:
        print(f"Generating PR description from changes since {base}...")

    created = open_pull_request(
        GitHubClient(store),
        GenerationClient(store),
        args.branch,
        base_branch=base,
        title=args.title,
        body=args.body,
    )
    if not created.ok:
        print(f"ERROR: {created.reason}")
        return 1

    print(f"Created pull request: {created.value}")
    return 0
