"""
Amazon ECS task runner.

Thin wrapper around the boto3 ECS client that starts tasks, waits for them
with the SDK's tasks_stopped waiter and judges their container exit codes.

Example:
    >>> from services.ecs.task_runner import ECSTaskRunner
    >>> runner = ECSTaskRunner(region="us-east-1")
    >>> arns = runner.launch("default", "my-task:3", count=1)
    >>> runner.wait_for_tasks_stopped("default", arns, wait_minutes=30)
    >>> runner.judge_outcome("default", arns)
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

import boto3
from botocore.config import Config

from services.ecs.task_runner.config import clamp_wait_minutes
from services.ecs.task_runner.constants import (
    CONSOLE_TASKS_URL,
    DEFAULT_AGENT,
    DEFAULT_CLUSTER,
    DEFAULT_WAITER_DELAY_SEC,
    DEFAULT_WAITER_MAX_WAIT_SEC,
    SUCCESS_MESSAGE,
)
from services.ecs.task_runner.errors import ContainerFailureError, LaunchError
from services.ecs.task_runner.types import RunResult, TaskOutcome

if TYPE_CHECKING:
    from mypy_boto3_ecs import ECSClient

logger = logging.getLogger("ecs_task_runner")


def waiter_config(max_wait_sec: int, delay_sec: int = DEFAULT_WAITER_DELAY_SEC) -> dict[str, int]:
    """
    Express a total wait budget as a boto3 WaiterConfig.

    Args:
        max_wait_sec: Total seconds the waiter may spend polling.
        delay_sec: Seconds between polls.

    Returns:
        Dict with Delay and MaxAttempts.
    """
    return {
        "Delay": delay_sec,
        "MaxAttempts": max(1, math.ceil(max_wait_sec / delay_sec)),
    }


class ECSTaskRunner:
    """
    Runs one batch of ECS tasks and reports how they ended.

    Attributes:
        region: AWS region override, or None to let boto3 resolve it.
        profile: AWS named profile, or None.
        agent: String appended to the SDK user agent.
        waiter_max_wait_sec: Budget for the tasks_stopped waiter.
    """

    def __init__(
        self,
        region: str | None = None,
        profile: str | None = None,
        agent: str = DEFAULT_AGENT,
        waiter_max_wait_sec: int = DEFAULT_WAITER_MAX_WAIT_SEC,
        client: ECSClient | None = None,
    ) -> None:
        """
        Initialize the runner.

        Args:
            region: AWS region. Falls back to AWS_REGION / AWS_DEFAULT_REGION
                or the shared config, as boto3 does.
            profile: AWS named profile.
            agent: User agent suffix sent with every request.
            waiter_max_wait_sec: Budget handed to the SDK waiter.
            client: Pre-built ECS client, mostly for tests.
        """
        self.region = region
        self.profile = profile
        self.agent = agent
        self.waiter_max_wait_sec = waiter_max_wait_sec
        self._ecs = client

    @property
    def ecs(self) -> ECSClient:
        """Lazily create the boto3 ECS client."""
        if self._ecs is None:
            session = boto3.session.Session(profile_name=self.profile, region_name=self.region)
            self._ecs = session.client("ecs", config=Config(user_agent_extra=self.agent))
            logger.debug("ECS client initialized region=%s", self._ecs.meta.region_name)
        return self._ecs

    def run_task(
        self,
        cluster: str,
        task_definition: str,
        count: int,
        started_by: str,
    ) -> RunResult:
        """
        Issue a single run_task request.

        Returns:
            Parsed response, failures included.
        """
        request = {
            "cluster": cluster,
            "taskDefinition": task_definition,
            "count": count,
            "startedBy": started_by,
        }
        logger.debug("Running task with %s", json.dumps(request))
        response = self.ecs.run_task(**request)
        logger.debug("Run task response %s", json.dumps(response, default=str))
        return RunResult.from_api_response(response)

    def launch(
        self,
        cluster: str | None,
        task_definition: str,
        count: int,
        started_by: str | None = None,
    ) -> list[str]:
        """
        Start tasks and return their ARNs.

        Args:
            cluster: Cluster name; "default" when empty.
            task_definition: Task definition to run.
            count: Number of tasks.
            started_by: Actor label; the agent string when empty.

        Returns:
            Launched task ARNs in scheduler order.

        Raises:
            LaunchError: If the scheduler reported any failure.
        """
        result = self.run_task(
            cluster=cluster or DEFAULT_CLUSTER,
            task_definition=task_definition,
            count=count,
            started_by=started_by or self.agent,
        )
        if result.failures:
            raise LaunchError(result.failures)
        logger.info("Launched %d task(s): %s", len(result.task_arns), ", ".join(result.task_arns))
        return result.task_arns

    def wait_for_tasks_stopped(
        self,
        cluster: str,
        task_arns: list[str],
        wait_minutes: int,
    ) -> None:
        """
        Block until every task is STOPPED.

        Polling is left to the tasks_stopped waiter; its WaiterError is not
        caught here.
        """
        wait_minutes = clamp_wait_minutes(wait_minutes)
        config = waiter_config(self.waiter_max_wait_sec)
        logger.debug(
            "Waiting for tasks to stop wait_minutes=%s waiter=%s", wait_minutes, config
        )

        waiter = self.ecs.get_waiter("tasks_stopped")
        waiter.wait(cluster=cluster, tasks=task_arns, WaiterConfig=config)

        logger.info(
            "All tasks have stopped. Watch progress in the Amazon ECS console: %s",
            CONSOLE_TASKS_URL.format(region=self.ecs.meta.region_name, cluster=cluster),
        )

    def describe_tasks(self, cluster: str, task_arns: list[str]) -> list[TaskOutcome]:
        response: dict[str, Any] = self.ecs.describe_tasks(cluster=cluster, tasks=task_arns)
        return [TaskOutcome.from_api_response(task) for task in response.get("tasks") or []]

    def judge_outcome(self, cluster: str, task_arns: list[str]) -> list[TaskOutcome]:
        """
        Check container exit codes of stopped tasks.

        Returns:
            The described tasks, when every container exited with 0.

        Raises:
            ContainerFailureError: With the reasons of every container whose
                exit code is not 0, in API order.
        """
        tasks = self.describe_tasks(cluster, task_arns)
        containers = [c for task in tasks for c in task.containers]
        reasons = [c.reason for c in containers]

        failed_idx = [i for i, c in enumerate(containers) if c.failed]
        failures = [reasons[i] or "" for i in failed_idx]
        if failures:
            raise ContainerFailureError(failures)

        logger.info(SUCCESS_MESSAGE)
        return tasks
