"""Tests for commitpilot.lib.types module."""

import dataclasses

import pytest

from commitpilot.lib.types import Failure, FailureKind, GeneratedSummary, Success


class TestOutcome:
    """Test Success and Failure."""

    def test_success_ok(self):
        assert Success("x").ok is True
        assert Success("x").source is None

    def test_failure_ok(self):
        assert Failure("boom").ok is False
        assert Failure("boom").kind is FailureKind.PROCESS_EXECUTION

    def test_with_stage_prefixes_and_keeps_kind(self):
        failure = Failure("Permission denied (publickey).", FailureKind.PROCESS_EXECUTION)
        staged = failure.with_stage("push")
        assert staged.reason == "push failed: Permission denied (publickey)."
        assert staged.kind is FailureKind.PROCESS_EXECUTION
        assert failure.reason == "Permission denied (publickey)."

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Success("x").value = "y"
        with pytest.raises(dataclasses.FrozenInstanceError):
            GeneratedSummary("t", "m").title = "other"
