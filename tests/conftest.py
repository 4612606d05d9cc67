from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from services.ecs.task_runner import ECSTaskRunner


def run_task_response(*arns, failures=None):
    return {
        "tasks": [{"taskArn": arn, "lastStatus": "PROVISIONING"} for arn in arns],
        "failures": failures or [],
    }


def describe_response(*tasks):
    """Each task is a list of (exit_code, reason) pairs, one per container."""
    return {
        "tasks": [
            {
                "taskArn": f"arn:aws:ecs:us-east-1:123456789012:task/default/t{i}",
                "lastStatus": "STOPPED",
                "containers": [
                    {"name": f"c{j}", "exitCode": code, "reason": reason}
                    for j, (code, reason) in enumerate(containers)
                ],
            }
            for i, containers in enumerate(tasks)
        ],
        "failures": [],
    }


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "INPUT_TASK-DEFINITION-ARN",
        "INPUT_CLUSTER",
        "INPUT_COUNT",
        "INPUT_STARTED-BY",
        "INPUT_WAIT-FOR-FINISH",
        "INPUT_WAIT-FOR-MINUTES",
        "INPUT_WAITER-MAX-WAIT-SECONDS",
        "ECS_WAITER_MAX_WAIT_SECONDS",
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ecs_client():
    client = MagicMock()
    client.meta.region_name = "us-east-1"
    return client


@pytest.fixture
def runner(ecs_client):
    return ECSTaskRunner(client=ecs_client)


@pytest.fixture(autouse=True)
def _restore_logger():
    pkg_logger = logging.getLogger("ecs_task_runner")
    saved = (pkg_logger.handlers[:], pkg_logger.level, pkg_logger.propagate)
    yield
    pkg_logger.handlers = saved[0]
    pkg_logger.setLevel(saved[1])
    pkg_logger.propagate = saved[2]
