"""
Shared result types for commitpilot.

Every git, gh and generation operation returns an Outcome: either a Success
carrying a value or a Failure carrying a human-readable reason. Callers check
.ok before touching .value; nothing in the core raises past its boundary.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(Enum):
    """Category of a Failure, used by callers that branch on the cause."""
    CONFIGURATION_MISSING = "configuration_missing"
    PROCESS_SPAWN = "process_spawn"
    PROCESS_EXECUTION = "process_execution"
    NETWORK = "network"
    PARSE = "parse"
    INVALID_INPUT = "invalid_input"
    DISABLED = "disabled"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful operation result."""
    value: T
    source: str | None = None  # Which strategy produced the value, e.g. "gh" or "git"

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed operation result."""
    reason: str
    kind: FailureKind = FailureKind.PROCESS_EXECUTION

    @property
    def ok(self) -> bool:
        return False

    def with_stage(self, stage: str) -> "Failure":
        """Return a copy whose reason names the stage that failed."""
        return replace(self, reason=f"{stage} failed: {self.reason}")


Outcome = Union[Success[T], Failure]


@dataclass(frozen=True)
class GeneratedSummary:
    """Title and body produced for a diff."""
    title: str
    message: str
