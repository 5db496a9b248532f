"""commitpilot: summarize git changes with Claude, then commit, push and open PRs."""

__version__ = "0.1.0"
