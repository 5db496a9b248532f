"""External command runner with spawn-failure handling."""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from commitpilot.lib.config import RepositoryContext
from commitpilot.lib.types import Failure, FailureKind, Outcome, Success

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True)
class CommandResult:
    """Result of one external process invocation."""
    returncode: int
    stdout: bytes
    stderr: bytes
    spawn_error: str | None = None
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and self.spawn_error is None and not self.timed_out

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def run_command(
    executable: str,
    args: list[str],
    cwd: Path | str,
    env_overrides: dict[str, str] | None = None,
    timeout: int | None = None,
) -> CommandResult:
    """
    Run an external command and capture all of its output.

    Args:
        executable: Program to run (resolved on PATH)
        args: Arguments passed after the executable
        cwd: Working directory for the process
        env_overrides: Variables merged over the inherited environment
        timeout: Optional timeout in seconds (None waits indefinitely)

    Returns:
        CommandResult. A process that could not be started (missing binary,
        permission denied, missing cwd) has spawn_error set instead of raising.
    """
    cmd = [executable] + args
    env = None
    if env_overrides:
        env = {**os.environ, **env_overrides}

    logger.debug(f"Running {cmd} in {cwd}")
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            env=env,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(
            returncode=-1,
            stdout=b"",
            stderr=f"Command timed out after {timeout}s".encode(),
            timed_out=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Failed to execute {executable}: {e}")
        return CommandResult(
            returncode=-1,
            stdout=b"",
            stderr=b"",
            spawn_error=f"Failed to execute {executable}: {e}",
        )

    return CommandResult(
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def run_git(
    args: list[str],
    cwd: Path | str,
    env_overrides: dict[str, str] | None = None,
    executable: str = "git",
) -> CommandResult:
    """Run a git command with the repository as working directory."""
    return run_command(executable, args, cwd, env_overrides=env_overrides)


def to_outcome(result: CommandResult) -> Outcome[str]:
    """
    Interpret a CommandResult.

    Spawn errors and non-zero exits become Failures; stderr is carried as the
    reason. Tools that report on stdout only (git commit with nothing staged)
    fall back to stdout, then to UNKNOWN_ERROR when nothing was printed.
    """
    if result.spawn_error is not None:
        return Failure(result.spawn_error, FailureKind.PROCESS_SPAWN)
    if not result.success:
        reason = result.stderr_text.strip() or result.stdout_text.strip() or UNKNOWN_ERROR
        return Failure(reason, FailureKind.PROCESS_EXECUTION)
    return Success(result.stdout_text)


def run_in_repo(ctx: RepositoryContext, args: list[str], env_overrides: dict[str, str] | None = None) -> Outcome[str]:
    """
    Run git inside the configured repository.

    Refuses to run when the repository path is unset.
    """
    if not ctx.repository_path:
        return Failure("Repository path not configured", FailureKind.CONFIGURATION_MISSING)
    result = run_git(args, ctx.repository_path, env_overrides=env_overrides, executable=ctx.git_executable)
    return to_outcome(result)
