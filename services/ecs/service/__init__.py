from __future__ import annotations

from services.ecs.service.workflow import build_runner, run, run_task_workflow

__all__ = [
    "build_runner",
    "run",
    "run_task_workflow",
]
