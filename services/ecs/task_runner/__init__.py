from __future__ import annotations

from services.ecs.task_runner.ci import (
    WorkflowCommandHandler,
    configure_logging,
    set_failed,
    set_output,
)
from services.ecs.task_runner.config import RunConfig, WaitPolicy, clamp_wait_minutes, parse_bool
from services.ecs.task_runner.constants import (
    DEFAULT_AGENT,
    DEFAULT_CLUSTER,
    DEFAULT_WAIT_MINUTES,
    DEFAULT_WAITER_MAX_WAIT_SEC,
    MAX_WAIT_MINUTES,
    SUCCESS_MESSAGE,
)
from services.ecs.task_runner.env import get_env_int, get_input
from services.ecs.task_runner.errors import (
    ContainerFailureError,
    ECSTaskError,
    InputError,
    LaunchError,
)
from services.ecs.task_runner.runner import ECSTaskRunner, waiter_config
from services.ecs.task_runner.types import (
    ContainerOutcome,
    LaunchFailure,
    RunOutcome,
    RunResult,
    TaskOutcome,
)

__all__ = [
    "DEFAULT_AGENT",
    "DEFAULT_CLUSTER",
    "DEFAULT_WAIT_MINUTES",
    "DEFAULT_WAITER_MAX_WAIT_SEC",
    "MAX_WAIT_MINUTES",
    "SUCCESS_MESSAGE",
    "get_env_int",
    "get_input",
    "parse_bool",
    "clamp_wait_minutes",
    "RunConfig",
    "WaitPolicy",
    "ECSTaskRunner",
    "waiter_config",
    "LaunchFailure",
    "RunResult",
    "ContainerOutcome",
    "TaskOutcome",
    "RunOutcome",
    "ECSTaskError",
    "InputError",
    "LaunchError",
    "ContainerFailureError",
    "WorkflowCommandHandler",
    "configure_logging",
    "set_output",
    "set_failed",
]
