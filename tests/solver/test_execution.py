"""Tests for execution-policy helpers."""

import pytest

from ndjson_type_stats.solver import execution


def test_executor_override_modes(monkeypatch) -> None:
    monkeypatch.setenv(execution.NTS_EXECUTOR_ENV, "serial")
    assert execution.describe_executor(execution.get_executor_class()) == "serial"

    monkeypatch.setenv(execution.NTS_EXECUTOR_ENV, "threads")
    assert execution.describe_executor(execution.get_executor_class()) == "threads"

    monkeypatch.setenv(execution.NTS_EXECUTOR_ENV, "processes")
    assert execution.describe_executor(execution.get_executor_class()) == "processes"


def test_executor_auto_policy(monkeypatch) -> None:
    monkeypatch.delenv(execution.NTS_EXECUTOR_ENV, raising=False)

    monkeypatch.setattr(execution, "is_gil_enabled", lambda: True)
    assert execution.describe_executor(execution.get_executor_class()) == "processes"

    monkeypatch.setattr(execution, "is_gil_enabled", lambda: False)
    assert execution.describe_executor(execution.get_executor_class()) == "threads"


def test_configured_executor_used_without_override(monkeypatch) -> None:
    monkeypatch.delenv(execution.NTS_EXECUTOR_ENV, raising=False)
    assert execution.describe_executor(execution.get_executor_class("serial")) == "serial"
    assert execution.describe_executor(execution.get_executor_class("threads")) == "threads"


def test_env_override_beats_configured_executor(monkeypatch) -> None:
    monkeypatch.setenv(execution.NTS_EXECUTOR_ENV, "serial")
    assert execution.describe_executor(execution.get_executor_class("processes")) == "serial"


def test_unknown_configured_executor(monkeypatch) -> None:
    monkeypatch.delenv(execution.NTS_EXECUTOR_ENV, raising=False)
    with pytest.raises(ValueError):
        execution.get_executor_class("fibers")


def test_default_worker_count_is_positive(monkeypatch) -> None:
    monkeypatch.setattr(execution.os, "cpu_count", lambda: None)
    assert execution.default_worker_count() == 1


def test_gil_assumed_without_runtime_check(monkeypatch) -> None:
    monkeypatch.delattr(execution.sys, "_is_gil_enabled", raising=False)
    assert execution.is_gil_enabled() is True


def test_gil_check_result_is_used(monkeypatch) -> None:
    monkeypatch.setattr(execution.sys, "_is_gil_enabled", lambda: False, raising=False)
    assert execution.is_gil_enabled() is False


def test_describe_rejects_foreign_executor() -> None:
    with pytest.raises(ValueError):
        execution.describe_executor(object)
