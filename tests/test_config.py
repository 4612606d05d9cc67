from __future__ import annotations

import importlib
import os

import pytest

import services.ecs.task_runner.env as env_module
from services.ecs.task_runner import (
    DEFAULT_AGENT,
    DEFAULT_WAITER_MAX_WAIT_SEC,
    InputError,
    RunConfig,
    WaitPolicy,
    get_input,
    parse_bool,
)


@pytest.mark.parametrize("value", ["true", "TRUE", "True", " true "])
def test_parse_bool_true_literal(value):
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", ["false", "yes", "1", "on", "truthy", "t"])
def test_parse_bool_anything_else_is_false(value):
    assert parse_bool(value) is False


def test_parse_bool_unset_uses_default():
    assert parse_bool(None) is False
    assert parse_bool("") is False
    assert parse_bool("", default=True) is True
    assert parse_bool(False) is False


def test_build_fills_defaults():
    config = RunConfig.build(task_definition="app:1", count="2")

    assert config.cluster == "default"
    assert config.started_by == DEFAULT_AGENT
    assert config.count == 2
    assert config.wait.wait_for_finish is False
    assert config.wait.wait_minutes == 30
    assert config.wait.waiter_max_wait_sec == DEFAULT_WAITER_MAX_WAIT_SEC


def test_build_clamps_wait_minutes():
    config = RunConfig.build(task_definition="app:1", count="1", wait_minutes="500")
    assert config.wait.wait_minutes == 360


@pytest.mark.parametrize("raw", ["", "abc", "0", None])
def test_build_invalid_wait_minutes_falls_back(raw):
    config = RunConfig.build(task_definition="app:1", count="1", wait_minutes=raw)
    assert config.wait.wait_minutes == 30


def test_wait_policy_clamps_on_construction():
    assert WaitPolicy(wait_for_finish=True, wait_minutes=1000).wait_minutes == 360
    assert WaitPolicy(wait_minutes=360).wait_minutes == 360


@pytest.mark.parametrize("raw", ["two", "1.5", "2.5", "3abc", "0", "-3"])
def test_build_rejects_bad_count(raw):
    with pytest.raises(InputError):
        RunConfig.build(task_definition="app:1", count=raw)


def test_build_requires_task_definition():
    with pytest.raises(InputError, match="task-definition-arn"):
        RunConfig.build(task_definition="", count="1")


def test_waiter_budget_from_env(monkeypatch):
    monkeypatch.setenv("ECS_WAITER_MAX_WAIT_SECONDS", "900")
    config = RunConfig.build(task_definition="app:1", count="1")
    assert config.wait.waiter_max_wait_sec == 900


def test_get_input_reads_runner_env(monkeypatch):
    monkeypatch.setenv("INPUT_TASK-DEFINITION-ARN", "  app:7  ")
    assert get_input("task-definition-arn") == "app:7"
    assert get_input("cluster") == ""


def test_get_input_required(monkeypatch):
    with pytest.raises(InputError, match="Input required and not supplied: count"):
        get_input("count", required=True)


def test_from_inputs(monkeypatch):
    monkeypatch.setenv("INPUT_TASK-DEFINITION-ARN", "arn:aws:ecs:us-east-1:123456789012:task-definition/app:3")
    monkeypatch.setenv("INPUT_COUNT", "3")
    monkeypatch.setenv("INPUT_CLUSTER", "batch")
    monkeypatch.setenv("INPUT_STARTED-BY", "release-pipeline")
    monkeypatch.setenv("INPUT_WAIT-FOR-FINISH", "True")
    monkeypatch.setenv("INPUT_WAIT-FOR-MINUTES", "45")

    config = RunConfig.from_inputs()

    assert config.task_definition.endswith("task-definition/app:3")
    assert config.count == 3
    assert config.cluster == "batch"
    assert config.started_by == "release-pipeline"
    assert config.wait == WaitPolicy(wait_for_finish=True, wait_minutes=45)


@pytest.mark.parametrize("raw,expected", [("45m", 45), (" 12 ", 12), ("500min", 360), ("m45", 30)])
def test_build_reads_leading_wait_minutes(raw, expected):
    config = RunConfig.build(task_definition="app:1", count="1", wait_minutes=raw)
    assert config.wait.wait_minutes == expected


def test_dotenv_in_working_directory_is_ignored(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("ECS_RUN_TASK_FROM_WORKSPACE=1\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ECS_RUN_TASK_FROM_WORKSPACE", raising=False)

    importlib.reload(env_module)

    assert "ECS_RUN_TASK_FROM_WORKSPACE" not in os.environ
    assert env_module._env_path.parent == env_module.Path(env_module.__file__).parent
