# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the ``cargo verus`` command-line front end."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cargo_verus import __version__
from cargo_verus.cli import app as cli_app
from cargo_verus.cli.app import CliState, app, main
from cargo_verus.command import CargoSubcommand, PreparedCommand, VerusInvocation
from cargo_verus.config import Settings
from cargo_verus.errors import DriverVersionMismatchError


class RecordingBackend:
    def __init__(self, returncode: int = 0) -> None:
        self.invocations: list[VerusInvocation] = []
        self.returncode = returncode

    def prepare(self, invocation: VerusInvocation, settings: Settings) -> PreparedCommand:
        self.invocations.append(invocation)
        return PreparedCommand(cmd=["cargo", invocation.subcommand.value, *invocation.cargo_args], env={})

    def execute(self, prepared: PreparedCommand) -> int:
        return self.returncode


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> RecordingBackend:
    recorder = RecordingBackend()
    monkeypatch.setattr(cli_app, "prepare_command", recorder.prepare)
    monkeypatch.setattr(cli_app, "execute", recorder.execute)
    for name in ("CARGO", "VERUS_DRIVER_PATH", "CARGO_VERUS_LOG", "CARGO_VERUS_EMOJI"):
        monkeypatch.delenv(name, raising=False)
    return recorder


def test_default_subcommand_is_build(backend: RecordingBackend) -> None:
    result = CliRunner().invoke(app, ["--release", "-p", "app"])

    assert result.exit_code == 0, result.output
    (invocation,) = backend.invocations
    assert invocation.subcommand is CargoSubcommand.BUILD
    assert invocation.cargo_args == ("--release", "-p", "app")
    assert not invocation.just_verify


def test_control_flags_are_consumed(backend: RecordingBackend) -> None:
    result = CliRunner().invoke(app, ["--check", "--features=extra", "--just-verify"])

    assert result.exit_code == 0, result.output
    (invocation,) = backend.invocations
    assert invocation.subcommand is CargoSubcommand.CHECK
    assert invocation.just_verify
    assert invocation.cargo_args == ("--features=extra",)
    assert invocation.global_driver_args() == ["--verus-driver-arg=--compile-when-not-primary-package"]


def test_driver_args_come_from_context(backend: RecordingBackend) -> None:
    result = CliRunner().invoke(app, ["--offline"], obj=CliState(driver_args=("--verus-arg=--rlimit=5",)))

    assert result.exit_code == 0, result.output
    (invocation,) = backend.invocations
    assert invocation.cargo_args == ("--offline",)
    assert invocation.driver_args == ("--verus-arg=--rlimit=5",)


def test_exit_status_of_cargo_is_propagated(backend: RecordingBackend) -> None:
    backend.returncode = 101

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 101


def test_errors_abort_with_diagnostic(monkeypatch: pytest.MonkeyPatch, backend: RecordingBackend) -> None:
    def refuse(invocation: VerusInvocation, settings: Settings) -> PreparedCommand:
        raise DriverVersionMismatchError("verus-driver version 0.2.0 must match ==0.1.0")

    monkeypatch.setattr(cli_app, "prepare_command", refuse)

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 1
    assert "must match ==0.1.0" in result.output


def test_invalid_log_level_is_reported(monkeypatch: pytest.MonkeyPatch, backend: RecordingBackend) -> None:
    monkeypatch.setenv("CARGO_VERUS_LOG", "chatty")

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 1
    assert "CARGO_VERUS_LOG" in result.output
    assert backend.invocations == []


def test_version_flag(backend: RecordingBackend) -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"cargo-verus {__version__}" in result.output
    assert backend.invocations == []


def test_main_routes_separator_tail_to_driver(backend: RecordingBackend) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["verus", "--check", "--release", "--", "--verus-arg=--expand-errors", "--release"])

    assert excinfo.value.code == 0
    (invocation,) = backend.invocations
    assert invocation.subcommand is CargoSubcommand.CHECK
    assert invocation.cargo_args == ("--release",)
    assert invocation.driver_args == ("--verus-arg=--expand-errors", "--release")


def test_main_does_not_treat_short_clusters_as_help(backend: RecordingBackend) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-Zthreads=8"])

    assert excinfo.value.code == 0
    assert backend.invocations[0].cargo_args == ("-Zthreads=8",)


def test_main_expands_short_version_alias(backend: RecordingBackend, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-V"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out
