# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the ``verus-driver`` binary and verify that its version is compatible."""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from .constants import DRIVER_NAME, DRIVER_VERSION_ARG, DRIVER_VERSION_REQUIREMENT
from .errors import DriverVersionMismatchError, DriverVersionParseError
from .process_utils import run_command

LOGGER = logging.getLogger(__name__)

# SemVer 2.0: no leading zeros, no "v" prefix, exactly three numeric components.
SEMVER_PATTERN = re.compile(
    r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
)


def driver_version_requirement() -> SpecifierSet:
    return SpecifierSet(DRIVER_VERSION_REQUIREMENT)


def unchecked_driver_path(executable: str | None = None) -> Path:
    """Return the driver path installed next to the running front end.

    Args:
        executable: Path of the running front end; defaults to ``sys.argv[0]``.

    Returns:
        Path: Sibling ``verus-driver`` path, with ``.exe`` on Windows.
    """

    current = Path(executable or sys.argv[0]).resolve()
    path = current.with_name(DRIVER_NAME)
    if os.name == "nt":
        path = path.with_suffix(".exe")
    return path


def parse_driver_version_output(stdout: str, *, tool_name: str = DRIVER_NAME) -> Version | None:
    """Return the version reported as ``<tool_name> <semver>``, or ``None``.

    The token must be a SemVer 2.0 string; forms that PEP 440 would pad or
    normalise (``0.1``, ``v0.1.0``, ``0.1.0.0``) are rejected.
    """

    parts = stdout.split()
    if len(parts) < 2 or parts[0] != tool_name:
        return None
    if SEMVER_PATTERN.fullmatch(parts[1]) is None:
        return None
    try:
        return Version(parts[1])
    except InvalidVersion:
        return None


def ensure_compatible(version: Version, requirement: SpecifierSet | None = None) -> None:
    """Raise unless ``version`` satisfies ``requirement``.

    Raises:
        DriverVersionMismatchError: When the version falls outside the requirement.
    """

    spec = requirement if requirement is not None else driver_version_requirement()
    if not spec.contains(version, prereleases=True):
        raise DriverVersionMismatchError(f"{DRIVER_NAME} version {version} must match {spec}")


def get_driver_version(path: Path, *, tool_name: str = DRIVER_NAME) -> Version:
    """Run the driver's version probe and parse its answer.

    Raises:
        CommandSpawnError: When the driver cannot be started.
        SubprocessExecutionError: When the probe exits with a non-zero status.
        DriverVersionParseError: When the probe output is not ``<tool_name> <version>``.
    """

    command = [str(path), DRIVER_VERSION_ARG]
    completed = run_command(command, capture_output=True)
    stdout = completed.stdout or ""
    version = parse_driver_version_output(stdout, tool_name=tool_name)
    if version is None:
        raise DriverVersionParseError(f"Command {' '.join(command)!r} did not produce valid output: {stdout!r}")
    return version


def checked_driver_path(override: Path | None = None, requirement: SpecifierSet | None = None) -> Path:
    """Return the driver path after confirming it reports a compatible version."""

    path = override if override is not None else unchecked_driver_path()
    version = get_driver_version(path)
    ensure_compatible(version, requirement)
    LOGGER.debug("using %s %s at %s", DRIVER_NAME, version, path)
    return path


__all__ = [
    "checked_driver_path",
    "driver_version_requirement",
    "ensure_compatible",
    "get_driver_version",
    "parse_driver_version_output",
    "unchecked_driver_path",
]
