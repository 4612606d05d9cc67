#!/usr/bin/env python3
"""
Amazon ECS Run Task CLI

Command-line interface for running ECS tasks and checking how they ended
"""

import argparse
import json
import logging
import sys
import traceback
from dataclasses import asdict

from services.ecs.service import run_task_workflow
from services.ecs.task_runner import (
    DEFAULT_WAITER_MAX_WAIT_SEC,
    ECSTaskRunner,
    RunConfig,
    get_input,
)

logger = logging.getLogger("ecs_task_runner")


def get_runner(args) -> ECSTaskRunner:
    """Get runner instance from global options"""
    return ECSTaskRunner(
        region=args.region,
        profile=args.profile,
        waiter_max_wait_sec=args.waiter_max_wait_seconds or DEFAULT_WAITER_MAX_WAIT_SEC,
    )


def cmd_run(args):
    """Run tasks, optionally waiting for them to stop"""
    # Flags win; unset flags fall back to the step inputs
    config = RunConfig.build(
        task_definition=args.task_definition or get_input("task-definition-arn"),
        count=args.count if args.count is not None else get_input("count"),
        cluster=args.cluster or get_input("cluster"),
        started_by=args.started_by or get_input("started-by"),
        wait_for_finish=args.wait or get_input("wait-for-finish"),
        wait_minutes=args.wait_minutes or get_input("wait-for-minutes"),
        waiter_max_wait_sec=args.waiter_max_wait_seconds or get_input("waiter-max-wait-seconds"),
        region=args.region,
        profile=args.profile,
    )

    def _report(task_arns):
        if args.json:
            print(json.dumps({"task-arn": task_arns}, indent=2))
        else:
            for arn in task_arns:
                print(arn)

    # The success message is logged by judge_outcome
    run_task_workflow(config, on_launched=_report)


def cmd_wait(args):
    """Wait for existing tasks to stop"""
    runner = get_runner(args)
    runner.wait_for_tasks_stopped(args.cluster, args.task_arns, args.wait_minutes)
    print(f"{len(args.task_arns)} task(s) stopped")


def cmd_check(args):
    """Fail unless every container of the tasks exited with 0"""
    runner = get_runner(args)
    runner.judge_outcome(args.cluster, args.task_arns)


def cmd_describe(args):
    """Show container exit codes of tasks"""
    runner = get_runner(args)
    tasks = runner.describe_tasks(args.cluster, args.task_arns)

    if args.json:
        print(json.dumps([asdict(t) for t in tasks], indent=2, default=str))
        return

    if not tasks:
        print("No tasks found")
        return

    print(f"{'Task':<40} {'Status':<10} {'Container':<20} {'Exit':<5} {'Reason'}")
    print("-" * 100)

    for task in tasks:
        task_id = (task.task_arn or "N/A").rsplit("/", 1)[-1]
        for container in task.containers or []:
            exit_code = "-" if container.exit_code is None else container.exit_code
            print(
                f"{task_id:<40} "
                f"{task.last_status or 'unknown':<10} "
                f"{container.name or 'N/A':<20} "
                f"{exit_code!s:<5} "
                f"{container.reason or ''}"
            )


def main():
    parser = argparse.ArgumentParser(
        description="Amazon ECS Run Task",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    # Global options
    parser.add_argument("--region", "-r", help="AWS region (default: from AWS_REGION or config)")
    parser.add_argument("--profile", "-p", help="AWS named profile")
    parser.add_argument(
        "--waiter-max-wait-seconds",
        type=int,
        help=f"Polling budget of the tasks_stopped waiter (default: {DEFAULT_WAITER_MAX_WAIT_SEC})"
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output in JSON format"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run a task definition")
    run_parser.add_argument("--task-definition", "-t", help="Task definition family, family:revision or ARN")
    run_parser.add_argument("--cluster", "-c", help="Cluster name (default: default)")
    run_parser.add_argument("--count", "-n", help="Number of tasks to run")
    run_parser.add_argument("--started-by", help="Started-by label")
    run_parser.add_argument("--wait", "-w", action="store_true", help="Wait for the tasks to stop and check exit codes")
    run_parser.add_argument("--wait-minutes", type=int, help="Wait budget in minutes (default: 30, max: 360)")
    run_parser.set_defaults(func=cmd_run)

    # Wait command
    wait_parser = subparsers.add_parser("wait", help="Wait for tasks to stop")
    wait_parser.add_argument("task_arns", nargs="+", help="Task ARNs")
    wait_parser.add_argument("--cluster", "-c", default="default", help="Cluster name (default: default)")
    wait_parser.add_argument("--wait-minutes", type=int, default=30, help="Wait budget in minutes (default: 30)")
    wait_parser.set_defaults(func=cmd_wait)

    # Check command
    check_parser = subparsers.add_parser("check", help="Check container exit codes of stopped tasks")
    check_parser.add_argument("task_arns", nargs="+", help="Task ARNs")
    check_parser.add_argument("--cluster", "-c", default="default", help="Cluster name (default: default)")
    check_parser.set_defaults(func=cmd_check)

    # Describe command
    describe_parser = subparsers.add_parser("describe", help="Show container exit codes")
    describe_parser.add_argument("task_arns", nargs="+", help="Task ARNs")
    describe_parser.add_argument("--cluster", "-c", default="default", help="Cluster name (default: default)")
    describe_parser.set_defaults(func=cmd_describe)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except Exception as e:  # noqa: BLE001 - report and exit non-zero
        print(f"Error: {e}", file=sys.stderr)
        logger.debug("%s", traceback.format_exc())
        sys.exit(1)


if __name__ == "__main__":
    main()
