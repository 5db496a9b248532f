"""Tests for commitpilot.git.runner module."""

import os
import subprocess
from pathlib import Path
from unittest.mock import patch, MagicMock

from commitpilot.git.runner import (
    CommandResult,
    UNKNOWN_ERROR,
    run_command,
    run_git,
    run_in_repo,
    to_outcome,
)
from commitpilot.lib.config import RepositoryContext
from commitpilot.lib.types import FailureKind


class TestCommandResult:
    """Test CommandResult dataclass."""

    def test_success_when_returncode_zero(self):
        result = CommandResult(returncode=0, stdout=b"ok", stderr=b"")
        assert result.success is True

    def test_failure_when_returncode_nonzero(self):
        result = CommandResult(returncode=1, stdout=b"", stderr=b"error")
        assert result.success is False

    def test_failure_when_spawn_error(self):
        result = CommandResult(returncode=-1, stdout=b"", stderr=b"", spawn_error="not found")
        assert result.success is False

    def test_failure_when_timed_out(self):
        result = CommandResult(returncode=0, stdout=b"", stderr=b"", timed_out=True)
        assert result.success is False

    def test_text_properties_decode_utf8(self):
        result = CommandResult(returncode=0, stdout="héllo".encode(), stderr=b"\xff")
        assert result.stdout_text == "héllo"
        assert result.stderr_text == "�"


class TestRunCommand:
    """Test run_command function."""

    @patch("commitpilot.git.runner.subprocess.run")
    def test_captures_output_as_bytes(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=b"out", stderr=b"err")
        result = run_command("git", ["status"], Path("/repo"))
        assert result.stdout == b"out"
        assert result.stderr == b"err"
        call_args = mock_run.call_args
        assert call_args[0][0] == ["git", "status"]
        assert call_args[1]["cwd"] == "/repo"
        assert call_args[1]["capture_output"] is True

    @patch("commitpilot.git.runner.subprocess.run")
    def test_inherits_environment_without_overrides(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=b"", stderr=b"")
        run_command("git", ["status"], "/repo")
        assert mock_run.call_args[1]["env"] is None

    @patch.dict(os.environ, {"COMMITPILOT_TEST_VAR": "kept"})
    @patch("commitpilot.git.runner.subprocess.run")
    def test_overrides_merge_into_environment(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=b"", stderr=b"")
        run_command("git", ["push"], "/repo", env_overrides={"GIT_SSH_COMMAND": "ssh -i k"})
        env = mock_run.call_args[1]["env"]
        assert env["GIT_SSH_COMMAND"] == "ssh -i k"
        assert env["COMMITPILOT_TEST_VAR"] == "kept"

    @patch("commitpilot.git.runner.subprocess.run")
    def test_missing_binary_is_spawn_error(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "gh")
        result = run_command("gh", ["pr", "diff"], "/repo")
        assert result.spawn_error is not None
        assert "gh" in result.spawn_error
        assert result.returncode == -1

    @patch("commitpilot.git.runner.subprocess.run")
    def test_permission_denied_is_spawn_error(self, mock_run):
        mock_run.side_effect = PermissionError(13, "Permission denied")
        result = run_command("git", ["status"], "/repo")
        assert result.spawn_error is not None

    @patch("commitpilot.git.runner.subprocess.run")
    def test_handles_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="gh", timeout=10)
        result = run_command("gh", ["--version"], "/repo", timeout=10)
        assert result.timed_out
        assert not result.success
        assert "timed out" in result.stderr_text

    def test_runs_real_process(self, tmp_path):
        result = run_command("sh", ["-c", "printf hi; printf oops >&2; exit 3"], tmp_path)
        assert result.returncode == 3
        assert result.stdout == b"hi"
        assert result.stderr == b"oops"

    def test_nonexistent_executable(self, tmp_path):
        result = run_command("commitpilot-no-such-binary", [], tmp_path)
        assert result.spawn_error is not None


class TestRunGit:
    """Test run_git function."""

    @patch("commitpilot.git.runner.subprocess.run")
    def test_uses_cwd_not_C_flag(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=b"", stderr=b"")
        run_git(["diff", "--staged"], Path("/my/repo"))
        assert mock_run.call_args[0][0] == ["git", "diff", "--staged"]
        assert mock_run.call_args[1]["cwd"] == "/my/repo"

    @patch("commitpilot.git.runner.subprocess.run")
    def test_custom_executable(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=b"", stderr=b"")
        run_git(["status"], "/repo", executable="/usr/bin/git")
        assert mock_run.call_args[0][0][0] == "/usr/bin/git"


class TestToOutcome:
    """Test CommandResult -> Outcome mapping."""

    def test_success_carries_stdout(self):
        outcome = to_outcome(CommandResult(returncode=0, stdout=b"diff --git\n", stderr=b""))
        assert outcome.ok
        assert outcome.value == "diff --git\n"

    def test_failure_carries_stderr(self):
        outcome = to_outcome(CommandResult(returncode=128, stdout=b"", stderr=b"fatal: bad\n"))
        assert not outcome.ok
        assert outcome.reason == "fatal: bad"
        assert outcome.kind is FailureKind.PROCESS_EXECUTION

    def test_empty_stderr_uses_sentinel(self):
        outcome = to_outcome(CommandResult(returncode=1, stdout=b"", stderr=b"  \n"))
        assert outcome.reason == UNKNOWN_ERROR

    def test_empty_stderr_falls_back_to_stdout(self):
        outcome = to_outcome(CommandResult(returncode=1, stdout=b"nothing to commit\n", stderr=b""))
        assert outcome.reason == "nothing to commit"

    def test_stderr_preferred_over_stdout(self):
        outcome = to_outcome(CommandResult(returncode=1, stdout=b"partial", stderr=b"fatal: bad"))
        assert outcome.reason == "fatal: bad"

    def test_spawn_error_is_distinct_kind(self):
        outcome = to_outcome(CommandResult(returncode=-1, stdout=b"", stderr=b"", spawn_error="boom"))
        assert outcome.kind is FailureKind.PROCESS_SPAWN
        assert outcome.reason == "boom"


class TestRunInRepo:
    """Test run_in_repo function."""

    @patch("commitpilot.git.runner.subprocess.run")
    def test_refuses_empty_repository_path(self, mock_run):
        outcome = run_in_repo(RepositoryContext(repository_path=""), ["diff"])
        assert not outcome.ok
        assert outcome.reason == "Repository path not configured"
        assert outcome.kind is FailureKind.CONFIGURATION_MISSING
        mock_run.assert_not_called()

    @patch("commitpilot.git.runner.subprocess.run")
    def test_runs_in_repository(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout=b"x", stderr=b"")
        outcome = run_in_repo(RepositoryContext(repository_path="/repo"), ["diff"])
        assert outcome.ok
        assert mock_run.call_args[1]["cwd"] == "/repo"
