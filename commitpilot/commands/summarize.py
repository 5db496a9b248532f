"""
commitpilot summarize - Generate a title and message for a diff.
"""

from commitpilot.commands.diff import select_diff
from commitpilot.lib.config import ConfigStore
from commitpilot.lib.types import GeneratedSummary
from commitpilot.llm.client import GenerationClient
from commitpilot.workflow import summarize_diff


def print_summary(summary: GeneratedSummary) -> None:
    print(summary.title)
    print()
    print(summary.message)


def cmd_summarize(args, store: ConfigStore) -> int:
    diff = select_diff(args, store)
    if diff.ok and not diff.value.strip():
        print("No changes to summarize")
        return 0

    summary = summarize_diff(GenerationClient(store), diff)
    if not summary.ok:
        print(f"ERROR: {summary.reason}")
        return 1

    print_summary(summary.value)
    return 0
