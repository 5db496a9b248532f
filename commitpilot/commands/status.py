"""
commitpilot status - Check that settings and external tools are usable.
"""

import shutil
from pathlib import Path

from commitpilot.lib.config import ConfigStore
from commitpilot.lib.github import check_gh_available


def cmd_status(args, store: ConfigStore) -> int:
    """Report what is configured and what is missing. Returns 1 if anything required is missing."""
    config = store.load()
    problems = 0

    print(f"Settings: {store.path}")
    print(f"Enabled:  {'yes' if config.enabled else 'no'}")

    if not config.repository_path:
        print("Repository: not configured")
        problems += 1
    elif not (Path(config.repository_path) / ".git").exists():
        print(f"Repository: {config.repository_path} (not a git repository)")
        problems += 1
    else:
        print(f"Repository: {config.repository_path}")

    if not config.ssh_key_path:
        print("SSH key:    not configured")
        problems += 1
    elif not Path(config.ssh_key_path).expanduser().exists():
        print(f"SSH key:    {config.ssh_key_path} (file not found)")
        problems += 1
    else:
        print(f"SSH key:    {config.ssh_key_path}")

    print(f"API key:    {'configured' if config.api_key else 'not configured'}")
    if not config.api_key:
        problems += 1

    if shutil.which(config.git_executable):
        print(f"git:        {config.git_executable}")
    else:
        print(f"git:        {config.git_executable} not found on PATH")
        problems += 1

    # gh is optional: diffs fall back to git, only `pr` needs it
    gh_ok, gh_error = check_gh_available(config.gh_executable)
    if gh_ok:
        print("gh:         available")
    else:
        print(f"gh:         unavailable ({gh_error.splitlines()[0]})")

    return 1 if problems else 0
