# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Query the resolved package graph through ``cargo metadata``."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from .constants import METADATA_FORMAT_VERSION, METADATA_STANDALONE_FLAGS, METADATA_VALUED_FLAGS
from .errors import GraphConsistencyError, UsageError
from .models import CargoMetadata
from .process_utils import run_command

LOGGER = logging.getLogger(__name__)


def filter_metadata_args(
    args: Iterable[str],
    standalone_flags: Sequence[str] = METADATA_STANDALONE_FLAGS,
    flags_with_values: Sequence[str] = METADATA_VALUED_FLAGS,
) -> list[str]:
    """Return the subset of cargo ``args`` that influence dependency resolution.

    Args:
        args: Arguments destined for ``cargo build``/``cargo check``.
        standalone_flags: Flags kept on their own.
        flags_with_values: Flags kept together with their value, given either
            as the next argument or inline as ``flag=value``.

    Returns:
        list[str]: Arguments suitable for ``cargo metadata``.

    Raises:
        UsageError: When a valued flag is the last argument.
    """

    kept: list[str] = []
    remaining = iter(args)
    for arg in remaining:
        if arg in standalone_flags:
            kept.append(arg)
        elif arg in flags_with_values:
            value = next(remaining, None)
            if value is None:
                raise UsageError(f"Expected {arg} to be followed by a value")
            kept.extend((arg, value))
        elif any(arg.startswith(f"{flag}=") for flag in flags_with_values):
            kept.append(arg)
    return kept


def parse_metadata(payload: str) -> CargoMetadata:
    """Return the :class:`CargoMetadata` encoded in ``payload``.

    Raises:
        GraphConsistencyError: When the payload is not a valid metadata document.
    """

    try:
        return CargoMetadata.model_validate_json(payload)
    except ValidationError as exc:
        raise GraphConsistencyError(f"cargo metadata produced an unexpected document: {exc}") from exc


def query_metadata(cargo: str, cargo_args: Iterable[str]) -> CargoMetadata:
    """Run ``cargo metadata`` with the resolution-relevant ``cargo_args``.

    Raises:
        CommandSpawnError: When cargo cannot be started.
        SubprocessExecutionError: When cargo exits with a non-zero status.
        GraphConsistencyError: When the output cannot be parsed.
    """

    command = [cargo, "metadata", "--format-version", METADATA_FORMAT_VERSION, *filter_metadata_args(cargo_args)]
    LOGGER.debug("querying package graph: %s", " ".join(command))
    completed = run_command(command, capture_output=True)
    return parse_metadata(completed.stdout or "")


__all__ = ["filter_metadata_args", "parse_metadata", "query_metadata"]
