from __future__ import annotations

import logging
import traceback
from collections.abc import Callable

from services.ecs.task_runner import (
    ECSTaskRunner,
    RunConfig,
    RunOutcome,
    configure_logging,
    set_failed,
    set_output,
)

logger = logging.getLogger("ecs_task_runner")


def build_runner(config: RunConfig) -> ECSTaskRunner:
    return ECSTaskRunner(
        region=config.region,
        profile=config.profile,
        waiter_max_wait_sec=config.wait.waiter_max_wait_sec,
    )


def run_task_workflow(
    config: RunConfig,
    runner: ECSTaskRunner | None = None,
    on_launched: Callable[[list[str]], None] | None = None,
) -> RunOutcome:
    """
    Launch -> (optional) wait -> (optional) judge.

    on_launched is called with the task ARNs as soon as they are known, so
    they are reported even when waiting or judging fails afterwards.

    Raises:
        LaunchError: Scheduler failures; nothing else is called.
        botocore.exceptions.WaiterError: Propagated from the waiter.
        ContainerFailureError: Some container exited non-zero.
    """
    runner = runner or build_runner(config)

    task_arns = runner.launch(
        cluster=config.cluster,
        task_definition=config.task_definition,
        count=config.count,
        started_by=config.started_by,
    )
    if on_launched is not None:
        on_launched(task_arns)

    if not config.wait.wait_for_finish:
        return RunOutcome(task_arns=task_arns)

    runner.wait_for_tasks_stopped(config.cluster, task_arns, config.wait.wait_minutes)
    outcomes = runner.judge_outcome(config.cluster, task_arns)
    return RunOutcome(task_arns=task_arns, waited=True, outcomes=outcomes)


def run(runner: ECSTaskRunner | None = None) -> int:
    """
    CI step entry point.

    Reads the step inputs, runs the workflow and reports the task-arn output.
    Any error marks the step failed with its message; the traceback only goes
    to the debug channel.

    Returns:
        Process exit code.
    """
    configure_logging()
    try:
        config = RunConfig.from_inputs()
        run_task_workflow(
            config,
            runner=runner,
            on_launched=lambda arns: set_output("task-arn", arns),
        )
    except Exception as exc:  # noqa: BLE001 - every failure fails the step
        code = set_failed(str(exc))
        logger.debug("%s", traceback.format_exc())
        return code
    return 0
