"""Typed outcome of a single scan sub-step.

Fetching, extraction, enrichment, and persistence never abort a scan on
their own failures. They report a StepResult instead and the pipeline decides
what to count and log.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StepStatus(str, Enum):
    """How a sub-step ended."""

    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """
    Outcome of one sub-step.

    Attributes:
        status: success, empty (ran fine, nothing found) or failed
        value: Produced value for successful steps
        reason: Human-readable explanation for empty and failed steps
    """

    status: StepStatus
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "StepResult[T]":
        return cls(StepStatus.SUCCESS, value=value)

    @classmethod
    def empty(cls, reason: Optional[str] = None) -> "StepResult[T]":
        return cls(StepStatus.EMPTY, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "StepResult[T]":
        return cls(StepStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status is StepStatus.FAILED
