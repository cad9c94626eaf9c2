# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess wrapper."""

from __future__ import annotations

import sys

import pytest

from cargo_verus.errors import CommandSpawnError, SubprocessExecutionError
from cargo_verus.process_utils import run_command


def test_captures_output() -> None:
    completed = run_command([sys.executable, "-c", "print('verus-driver 0.1.0')"], capture_output=True)

    assert completed.stdout.strip() == "verus-driver 0.1.0"


def test_non_zero_exit_raises_with_output() -> None:
    script = "import sys; sys.stderr.write('nope'); sys.exit(3)"

    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command([sys.executable, "-c", script], capture_output=True)

    assert excinfo.value.returncode == 3
    assert excinfo.value.stderr == "nope"


def test_non_zero_exit_is_returned_without_check() -> None:
    completed = run_command([sys.executable, "-c", "raise SystemExit(4)"], check=False)

    assert completed.returncode == 4


def test_missing_executable_raises_spawn_error() -> None:
    with pytest.raises(CommandSpawnError):
        run_command(["definitely-not-a-real-cargo-binary"])


def test_missing_absolute_executable_raises_spawn_error(tmp_path) -> None:
    with pytest.raises(CommandSpawnError):
        run_command([str(tmp_path / "verus-driver")])
