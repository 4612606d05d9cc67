from __future__ import annotations

DEFAULT_CLUSTER = "default"
DEFAULT_AGENT = "amazon-ecs-run-task-for-github-actions"
DEFAULT_WAIT_MINUTES = 30
MAX_WAIT_MINUTES = 360

# Budget handed to the tasks_stopped waiter, independent of wait-for-minutes
DEFAULT_WAITER_MAX_WAIT_SEC = 200
DEFAULT_WAITER_DELAY_SEC = 6

CONSOLE_TASKS_URL = (
    "https://console.aws.amazon.com/ecs/home?region={region}#/clusters/{cluster}/tasks"
)
SUCCESS_MESSAGE = "All tasks have exited successfully."
