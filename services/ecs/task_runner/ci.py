"""Runner I/O following the GitHub Actions workflow-command convention."""

from __future__ import annotations

import json
import logging
import os
import sys
import uuid
from typing import Any, TextIO

logger = logging.getLogger("ecs_task_runner")


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def to_command_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def issue_command(command: str, message: Any = "", stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    stream.write(f"::{command}::{_escape_data(to_command_value(message))}\n")
    stream.flush()


def set_output(name: str, value: Any, stream: TextIO | None = None) -> None:
    """
    Set a step output.

    Appends to the file named by GITHUB_OUTPUT when the runner provides one,
    otherwise emits the legacy set-output command.
    """
    rendered = to_command_value(value)
    output_path = os.environ.get("GITHUB_OUTPUT")
    if output_path:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        with open(output_path, "a", encoding="utf-8") as fh:
            fh.write(f"{name}<<{delimiter}\n{rendered}\n{delimiter}\n")
        return
    stream = stream or sys.stdout
    stream.write(f"\n::set-output name={name}::{_escape_data(rendered)}\n")
    stream.flush()


def set_failed(message: str, stream: TextIO | None = None) -> int:
    """Report the step as failed and return the process exit code."""
    issue_command("error", message, stream)
    return 1


class WorkflowCommandHandler(logging.Handler):
    """Render log records as workflow commands (debug/warning/error) or plain lines."""

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            stream = self.stream or sys.stdout
            if record.levelno >= logging.ERROR:
                issue_command("error", message, stream)
            elif record.levelno >= logging.WARNING:
                issue_command("warning", message, stream)
            elif record.levelno >= logging.INFO:
                stream.write(f"{message}\n")
                stream.flush()
            else:
                issue_command("debug", message, stream)
        except Exception:  # noqa: BLE001 - logging must not raise
            self.handleError(record)


def configure_logging(level: int = logging.DEBUG, stream: TextIO | None = None) -> logging.Handler:
    """Attach a WorkflowCommandHandler to the package logger."""
    handler = WorkflowCommandHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger = logging.getLogger("ecs_task_runner")
    pkg_logger.handlers = [handler]
    pkg_logger.setLevel(level)
    pkg_logger.propagate = False
    return handler
