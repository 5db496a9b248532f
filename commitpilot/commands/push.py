"""
commitpilot push - Stage everything, generate a commit message, commit and push.
"""

from commitpilot.commands.summarize import print_summary
from commitpilot.git.client import GitClient
from commitpilot.lib.config import ConfigStore
from commitpilot.llm.client import GenerationClient
from commitpilot.workflow import commit_and_push, prepare_push


def stage_and_summarize(git: GitClient, store: ConfigStore):
    """
    Stage all changes and generate a summary of the staged diff.

    Returns: (exit_code, summary). summary is None when the caller should
    stop and return exit_code.
    """
    diff = prepare_push(git)
    if not diff.ok:
        print(f"ERROR: {diff.reason}")
        return 1, None
    if not diff.value.strip():
        print("No changes to commit. All files are up to date.")
        return 0, None

    print("Generating commit message...")
    summary = GenerationClient(store).generate_summary(diff.value)
    if not summary.ok:
        print(f"ERROR: {summary.reason}")
        return 1, None

    print()
    print_summary(summary.value)
    print()
    return 0, summary.value


def confirm(question: str) -> bool:
    answer = input(f"{question} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def cmd_push(args, store: ConfigStore) -> int:
    git = GitClient(store)

    code, summary = stage_and_summarize(git, store)
    if summary is None:
        return code

    if not args.yes and not confirm("Commit and push?"):
        print("Aborted. Changes remain staged.")
        return 0

    pushed = commit_and_push(git, summary)
    if not pushed.ok:
        print(f"ERROR: {pushed.reason}")
        return 1

    print(f"Pushed {pushed.value} to origin")
    return 0
