# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Custom exceptions raised while preparing a ``cargo verus`` invocation."""

from __future__ import annotations

from collections.abc import Sequence


class CargoVerusError(RuntimeError):
    """Base class for failures that abort the run before cargo is spawned."""


class UsageError(CargoVerusError):
    """Raised when forwarded command-line flags are malformed."""


class SettingsError(CargoVerusError):
    """Raised when environment-provided settings are invalid."""


class MetadataConfigError(CargoVerusError):
    """Raised when a package carries a malformed ``metadata.verus`` table."""

    def __init__(self, name: str, version: str, detail: str) -> None:
        super().__init__(f"Failed to parse {name}-{version}.metadata.verus: {detail}")
        self.name = name
        self.version = version
        self.detail = detail


class GraphConsistencyError(CargoVerusError):
    """Raised when the resolved package graph violates its structural invariants."""


class InstructionEncodingError(CargoVerusError):
    """Raised when an instruction cannot be packed into an environment value."""


class DriverVersionError(CargoVerusError):
    """Raised when the driver binary does not report a compatible version."""


class DriverVersionParseError(DriverVersionError):
    """Raised when the driver's version output cannot be parsed."""


class DriverVersionMismatchError(DriverVersionError):
    """Raised when the driver's version falls outside the required range."""


class CommandSpawnError(CargoVerusError):
    """Raised when an external command cannot be started."""


class CommandOutputError(CargoVerusError):
    """Raised when an external command produces undecodable output."""


class SubprocessExecutionError(CargoVerusError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command {' '.join(command)!r} failed with exit status {returncode}\n"
            f"stdout: {stdout or '<none>'}\n"
            f"stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


__all__ = [
    "CargoVerusError",
    "CommandOutputError",
    "CommandSpawnError",
    "DriverVersionError",
    "DriverVersionMismatchError",
    "DriverVersionParseError",
    "GraphConsistencyError",
    "InstructionEncodingError",
    "MetadataConfigError",
    "SettingsError",
    "SubprocessExecutionError",
    "UsageError",
]
