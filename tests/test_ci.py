from __future__ import annotations

import io
import logging

from services.ecs.task_runner import configure_logging, set_failed, set_output


def test_set_output_appends_to_github_output(monkeypatch, tmp_path):
    output_file = tmp_path / "output"
    output_file.write_text("previous=1\n")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    set_output("task-arn", ["arn1", "arn2"])

    lines = output_file.read_text().splitlines()
    assert lines[0] == "previous=1"
    assert lines[1].startswith("task-arn<<ghadelimiter_")
    assert lines[2] == '["arn1", "arn2"]'
    assert lines[3] == lines[1].split("<<", 1)[1]


def test_set_output_legacy_command_without_file():
    stream = io.StringIO()

    set_output("task-arn", ["arn1"], stream=stream)

    assert stream.getvalue() == '\n::set-output name=task-arn::["arn1"]\n'


def test_set_failed_escapes_multiline_message():
    stream = io.StringIO()

    code = set_failed("reason-1\nreason-3 100%", stream=stream)

    assert code == 1
    assert stream.getvalue() == "::error::reason-1%0Areason-3 100%25\n"


def test_handler_maps_levels_to_commands():
    stream = io.StringIO()
    configure_logging(stream=stream)
    log = logging.getLogger("ecs_task_runner")

    log.debug("polling %s", "arn1")
    log.info("plain line")
    log.warning("careful")
    log.error("broken")

    assert stream.getvalue().splitlines() == [
        "::debug::polling arn1",
        "plain line",
        "::warning::careful",
        "::error::broken",
    ]
