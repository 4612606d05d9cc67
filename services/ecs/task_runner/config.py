from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from services.ecs.task_runner.constants import (
    DEFAULT_AGENT,
    DEFAULT_CLUSTER,
    DEFAULT_WAIT_MINUTES,
    DEFAULT_WAITER_MAX_WAIT_SEC,
    MAX_WAIT_MINUTES,
)
from services.ecs.task_runner.env import get_env_int, get_input
from services.ecs.task_runner.errors import InputError

logger = logging.getLogger("ecs_task_runner")

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def parse_bool(value: str | bool | None, default: bool = False) -> bool:
    """
    Parse a boolean-like step input.

    Only the literal "true" (any case, surrounding whitespace ignored) is true.
    Anything else that is set, including "yes" or "1", is false.

    Args:
        value: Raw value. Booleans are returned unchanged.
        default: Result when the value is unset or blank.

    Returns:
        Parsed flag.
    """
    if isinstance(value, bool):
        return value
    if value is None or not value.strip():
        return default
    return value.strip().lower() == "true"


def clamp_wait_minutes(minutes: int) -> int:
    if minutes > MAX_WAIT_MINUTES:
        logger.debug("wait-for-minutes %s exceeds %s, clamping", minutes, MAX_WAIT_MINUTES)
        return MAX_WAIT_MINUTES
    return minutes


def _resolve_cluster(cluster: str | None) -> str:
    return cluster or DEFAULT_CLUSTER


def _resolve_started_by(started_by: str | None) -> str:
    return started_by or DEFAULT_AGENT


def _resolve_count(count: str | int | None) -> int:
    if count is None or count == "":
        raise InputError("Input required and not supplied: count")
    try:
        value = int(count)
    except ValueError as exc:
        raise InputError(f"count must be an integer, got {count!r}") from exc
    if value < 1:
        raise InputError(f"count must be a positive integer, got {value}")
    return value


def _resolve_wait_minutes(minutes: str | int | None) -> int:
    if isinstance(minutes, int):
        value = minutes
    else:
        # Leading digits only, so "45m" reads as 45
        match = _LEADING_INT.match(minutes or "")
        if match is None and minutes:
            logger.warning("Invalid wait-for-minutes %r; using default", minutes)
        value = int(match.group()) if match else 0
    if value <= 0:
        value = DEFAULT_WAIT_MINUTES
    return clamp_wait_minutes(value)


def _resolve_waiter_max_wait_sec(seconds: str | int | None) -> int:
    if seconds is None or seconds == "":
        return get_env_int("ECS_WAITER_MAX_WAIT_SECONDS", DEFAULT_WAITER_MAX_WAIT_SEC)
    try:
        value = int(seconds)
    except ValueError:
        logger.warning("Invalid waiter-max-wait-seconds %r; using default", seconds)
        return DEFAULT_WAITER_MAX_WAIT_SEC
    return value if value > 0 else DEFAULT_WAITER_MAX_WAIT_SEC


@dataclass(frozen=True)
class WaitPolicy:
    """
    Whether and how long to wait for launched tasks.

    Attributes:
        wait_for_finish: Block until every task is STOPPED.
        wait_minutes: Requested wait budget, clamped to MAX_WAIT_MINUTES.
        waiter_max_wait_sec: Budget handed to the SDK waiter.
    """

    wait_for_finish: bool = False
    wait_minutes: int = DEFAULT_WAIT_MINUTES
    waiter_max_wait_sec: int = DEFAULT_WAITER_MAX_WAIT_SEC

    def __post_init__(self) -> None:
        object.__setattr__(self, "wait_minutes", clamp_wait_minutes(self.wait_minutes))


@dataclass(frozen=True)
class RunConfig:
    """
    Inputs for one run, resolved once at entry.

    Attributes:
        task_definition: Task definition family, family:revision or ARN.
        count: Number of tasks to start.
        cluster: Target cluster name or ARN.
        started_by: Actor label attached to the tasks.
        wait: Wait policy.
        region: AWS region override; boto3 resolves it when None.
        profile: AWS named profile; boto3 resolves it when None.
    """

    task_definition: str
    count: int
    cluster: str = DEFAULT_CLUSTER
    started_by: str = DEFAULT_AGENT
    wait: WaitPolicy = field(default_factory=WaitPolicy)
    region: str | None = None
    profile: str | None = None

    @classmethod
    def build(
        cls,
        task_definition: str | None,
        count: str | int | None,
        cluster: str | None = None,
        started_by: str | None = None,
        wait_for_finish: str | bool | None = None,
        wait_minutes: str | int | None = None,
        waiter_max_wait_sec: str | int | None = None,
        region: str | None = None,
        profile: str | None = None,
    ) -> RunConfig:
        """Fill defaults and validate raw values from any source."""
        if not task_definition:
            raise InputError("Input required and not supplied: task-definition-arn")
        return cls(
            task_definition=task_definition,
            count=_resolve_count(count),
            cluster=_resolve_cluster(cluster),
            started_by=_resolve_started_by(started_by),
            wait=WaitPolicy(
                wait_for_finish=parse_bool(wait_for_finish),
                wait_minutes=_resolve_wait_minutes(wait_minutes),
                waiter_max_wait_sec=_resolve_waiter_max_wait_sec(waiter_max_wait_sec),
            ),
            region=region or None,
            profile=profile or None,
        )

    @classmethod
    def from_inputs(cls) -> RunConfig:
        """Populate from the CI runner's INPUT_* environment."""
        return cls.build(
            task_definition=get_input("task-definition-arn", required=True),
            count=get_input("count", required=True),
            cluster=get_input("cluster"),
            started_by=get_input("started-by"),
            wait_for_finish=get_input("wait-for-finish"),
            wait_minutes=get_input("wait-for-minutes"),
            waiter_max_wait_sec=get_input("waiter-max-wait-seconds"),
        )
