from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.ecs.task_runner.types import LaunchFailure


class ECSTaskError(Exception):
    """Base exception for ECS task operations."""

    pass


class InputError(ECSTaskError):
    """Raised when a step input is missing or cannot be parsed."""

    pass


class LaunchError(ECSTaskError):
    """Raised when the scheduler reports failures for a run_task request."""

    def __init__(self, failures: list[LaunchFailure]) -> None:
        self.failures = failures
        first = failures[0]
        super().__init__(f"{first.arn} is {first.reason}")


class ContainerFailureError(ECSTaskError):
    """Raised when one or more containers exited with a non-zero code."""

    def __init__(self, reasons: list[str]) -> None:
        self.reasons = reasons
        super().__init__("\n".join(reasons))
