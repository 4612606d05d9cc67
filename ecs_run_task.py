#!/usr/bin/env python3
"""
Amazon ECS "Run Task" step.

Entry point executed by action.yml: starts the task definition on the
cluster, optionally waits for the tasks to stop and fails the step when a
container exits non-zero.
"""

import sys

from services.ecs.service import run

if __name__ == "__main__":
    sys.exit(run())
