#!/usr/bin/env python3
"""commitpilot CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from commitpilot.lib.config import ConfigError, ConfigStore
from commitpilot.workflow import check_enabled
from commitpilot.commands import commit as cmd_commit_module
from commitpilot.commands import config as cmd_config_module
from commitpilot.commands import diff as cmd_diff_module
from commitpilot.commands import pr as cmd_pr_module
from commitpilot.commands import push as cmd_push_module
from commitpilot.commands import status as cmd_status_module
from commitpilot.commands import summarize as cmd_summarize_module


def get_store(args) -> ConfigStore:
    """Settings store from --config or the default location."""
    return ConfigStore(Path(args.config) if args.config else None)


def run_enabled(command, args) -> int:
    """Run a command that touches the repository or the API, if enabled."""
    store = get_store(args)
    try:
        enabled = check_enabled(store.load())
        if not enabled.ok:
            print(f"ERROR: {enabled.reason}")
            return 2
        return command(args, store)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 2


def run_plain(command, args) -> int:
    """Run a command that only reads or writes settings."""
    try:
        return command(args, get_store(args))
    except ConfigError as e:
        print(f"ERROR: {e}")
        return 2


def cmd_diff(args):
    return run_enabled(cmd_diff_module.cmd_diff, args)


def cmd_summarize(args):
    return run_enabled(cmd_summarize_module.cmd_summarize, args)


def cmd_commit(args):
    return run_enabled(cmd_commit_module.cmd_commit, args)


def cmd_push(args):
    return run_enabled(cmd_push_module.cmd_push, args)


def cmd_pr(args):
    return run_enabled(cmd_pr_module.cmd_pr, args)


def cmd_status(args):
    return run_plain(cmd_status_module.cmd_status, args)


def cmd_config_show(args):
    return run_plain(cmd_config_module.cmd_config_show, args)


def cmd_config_set(args):
    return run_plain(cmd_config_module.cmd_config_set, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='commitpilot',
        description='Summarize git changes with Claude, then commit, push, or open a PR',
    )
    parser.add_argument('--config', help='Settings file (default: ~/.config/commitpilot/settings.env)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # commitpilot diff
    p_diff = subparsers.add_parser('diff', help='Show working tree, staged, or branch diff')
    p_diff.add_argument('--staged', action='store_true', help='Show staged changes')
    p_diff.add_argument('--against', metavar='REF', help='Show changes since HEAD diverged from REF')
    p_diff.add_argument('--via-gh', action='store_true', help='With --against, ask gh for the PR diff first')
    p_diff.set_defaults(func=cmd_diff)

    # commitpilot summarize
    p_sum = subparsers.add_parser('summarize', help='Generate a title and message for a diff')
    p_sum.add_argument('--staged', action='store_true', help='Summarize staged changes')
    p_sum.add_argument('--against', metavar='REF', help='Summarize changes since HEAD diverged from REF')
    p_sum.add_argument('--via-gh', action='store_true', help='With --against, ask gh for the PR diff first')
    p_sum.set_defaults(func=cmd_summarize)

    # commitpilot commit
    p_commit = subparsers.add_parser('commit', help='Stage all, generate message, commit locally')
    p_commit.add_argument('--yes', '-y', action='store_true', help='Commit without confirmation')
    p_commit.set_defaults(func=cmd_commit)

    # commitpilot push
    p_push = subparsers.add_parser('push', help='Stage all, generate message, commit and push')
    p_push.add_argument('--yes', '-y', action='store_true', help='Commit and push without confirmation')
    p_push.set_defaults(func=cmd_push)

    # commitpilot pr
    p_pr = subparsers.add_parser('pr', help='Push a branch and open a pull request')
    p_pr.add_argument('branch', help='Branch to create (or switch to) and push')
    p_pr.add_argument('--base', metavar='REF', help='Base branch (default: BASE_BRANCH setting)')
    p_pr.add_argument('--title', help='PR title (generated if title or body is missing)')
    p_pr.add_argument('--body', help='PR body (generated if title or body is missing)')
    p_pr.set_defaults(func=cmd_pr)

    # commitpilot status
    p_status = subparsers.add_parser('status', help='Check settings and external tools')
    p_status.set_defaults(func=cmd_status)

    # commitpilot config
    p_config = subparsers.add_parser('config', help='Show or change settings')
    p_config.set_defaults(func=cmd_config_show)
    config_sub = p_config.add_subparsers(dest='config_cmd')

    # commitpilot config show
    p_config_show = config_sub.add_parser('show', help='Show settings (API key masked)')
    p_config_show.set_defaults(func=cmd_config_show)

    # commitpilot config set
    p_config_set = config_sub.add_parser('set', help='Change one setting')
    p_config_set.add_argument('key', help='Setting name, e.g. REPOSITORY_PATH')
    p_config_set.add_argument('value', help='New value')
    p_config_set.set_defaults(func=cmd_config_set)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
