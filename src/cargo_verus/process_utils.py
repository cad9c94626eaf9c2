# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# cargo and driver execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import CommandOutputError, CommandSpawnError, SubprocessExecutionError

if TYPE_CHECKING:
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute() or head_path.parent != Path("."):
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise CommandSpawnError(f"Executable '{head}' was not found on PATH")
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    capture_output: bool = False,
) -> _CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    Args:
        args: Executable followed by its arguments.
        cwd: Optional working directory.
        env: Complete environment for the child; inherits ours when ``None``.
        check: Raise :class:`SubprocessExecutionError` on a non-zero exit.
        capture_output: Capture stdout/stderr as text instead of inheriting them.

    Returns:
        CompletedProcess[str]: The finished process.

    Raises:
        CommandSpawnError: When the executable is missing or cannot be started.
        CommandOutputError: When captured output is not valid UTF-8.
        SubprocessExecutionError: When ``check`` is set and the exit status is non-zero.
    """

    normalized = _normalize_args(args)
    try:
        # Bandit: commands are assembled from fixed tokens plus user-forwarded
        # cargo arguments; no shell expansion takes place.
        completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            check=False,
            capture_output=capture_output,
            text=True,
            encoding="utf-8",
        )
    except OSError as exc:
        raise CommandSpawnError(f"Failed to spawn {normalized[0]}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise CommandOutputError(f"Command {normalized[0]!r} did not produce valid UTF-8 output") from exc

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = ["run_command"]
