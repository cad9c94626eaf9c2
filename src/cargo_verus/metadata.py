# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extraction of the ``[package.metadata.verus]`` table."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from .constants import METADATA_NAMESPACE
from .errors import MetadataConfigError
from .models import Package


class VerusMetadata(BaseModel):
    """Verification settings a package declares for itself.

    Every field defaults to ``False`` so that a table with no recognised keys
    yields a fully disabled record. Values must be real booleans; strings such
    as ``"true"`` are rejected rather than coerced.
    """

    model_config = ConfigDict(frozen=True)

    verify: StrictBool = False
    no_vstd: StrictBool = Field(default=False, alias="no-vstd")
    is_vstd: StrictBool = Field(default=False, alias="is-vstd")
    is_core: StrictBool = Field(default=False, alias="is-core")
    is_builtin: StrictBool = Field(default=False, alias="is-builtin")
    is_builtin_macros: StrictBool = Field(default=False, alias="is-builtin-macros")


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "<root>"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_verus_metadata(package: Package) -> VerusMetadata:
    """Return the :class:`VerusMetadata` declared by ``package``.

    Args:
        package: Package record whose free-form ``metadata`` block is inspected.

    Returns:
        VerusMetadata: Parsed settings, or all defaults when no ``verus`` table exists.

    Raises:
        MetadataConfigError: When the ``verus`` table exists but is malformed.
    """

    block = package.metadata
    if not isinstance(block, Mapping) or METADATA_NAMESPACE not in block:
        return VerusMetadata()
    try:
        return VerusMetadata.model_validate(block[METADATA_NAMESPACE])
    except ValidationError as exc:
        raise MetadataConfigError(package.name, package.version, _format_validation_error(exc)) from exc


__all__ = ["VerusMetadata", "parse_verus_metadata"]
