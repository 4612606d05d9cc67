from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LaunchFailure:
    """
    A failure entry from a run_task response.

    Attributes:
        arn: ARN of the resource that failed (may be missing in the response).
        reason: Reason given by the scheduler.
        detail: Optional extra detail.
    """

    arn: str | None
    reason: str | None
    detail: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> LaunchFailure:
        return cls(
            arn=data.get("arn"),
            reason=data.get("reason"),
            detail=data.get("detail"),
        )


@dataclass(frozen=True)
class RunResult:
    """
    Parsed run_task response.

    Attributes:
        task_arns: Launched task ARNs, in the order the scheduler returned them.
        failures: Failures reported for instances that could not be started.
        raw_response: Untouched API response.
    """

    task_arns: list[str]
    failures: list[LaunchFailure] = field(default_factory=list)
    raw_response: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> RunResult:
        return cls(
            task_arns=[task["taskArn"] for task in data.get("tasks") or []],
            failures=[LaunchFailure.from_api_response(f) for f in data.get("failures") or []],
            raw_response=data,
        )


@dataclass(frozen=True)
class ContainerOutcome:
    name: str | None
    exit_code: int | None
    reason: str | None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> ContainerOutcome:
        return cls(
            name=data.get("name"),
            exit_code=data.get("exitCode"),
            reason=data.get("reason"),
        )

    @property
    def failed(self) -> bool:
        # A container that never reported an exit code did not exit cleanly.
        return self.exit_code != 0


@dataclass(frozen=True)
class TaskOutcome:
    """
    Final state of one task, as returned by describe_tasks.

    Attributes:
        task_arn: Task ARN.
        last_status: Last known status (e.g. "STOPPED").
        stopped_reason: Why the task stopped, if reported.
        containers: Container outcomes in API order.
    """

    task_arn: str | None
    last_status: str | None
    stopped_reason: str | None
    containers: list[ContainerOutcome] = field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> TaskOutcome:
        return cls(
            task_arn=data.get("taskArn"),
            last_status=data.get("lastStatus"),
            stopped_reason=data.get("stoppedReason"),
            containers=[ContainerOutcome.from_api_response(c) for c in data.get("containers") or []],
        )


@dataclass(frozen=True)
class RunOutcome:
    task_arns: list[str]
    waited: bool = False
    outcomes: list[TaskOutcome] = field(default_factory=list)
