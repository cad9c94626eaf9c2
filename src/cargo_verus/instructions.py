# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Derive driver instructions globally and for each indexed package."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .constants import (
    COMPILE_WHEN_NOT_PRIMARY,
    COMPILE_WHEN_PRIMARY,
    IMPORT_DEP_IF_PRESENT,
    IS_CORE_ARG,
    IS_VSTD_ARG,
    NO_VSTD_ARG,
)
from .graph import MetadataIndex, MetadataIndexEntry


@dataclass(slots=True, frozen=True)
class PackageDirectives:
    """Everything the driver needs to know about one package."""

    package_id: str
    verify: bool
    is_builtin: bool
    is_builtin_macros: bool
    driver_args: tuple[str, ...] = field(default_factory=tuple)


def global_driver_args(*, just_verify: bool, extra_args: Iterable[str] = ()) -> list[str]:
    """Return the instructions applied to every compilation unit.

    Args:
        just_verify: ``True`` to skip compiling the primary package(s).
        extra_args: User-supplied driver arguments appended after the built-ins.

    Returns:
        list[str]: Ordered global instruction list.
    """

    args = [COMPILE_WHEN_NOT_PRIMARY]
    if not just_verify:
        args.append(COMPILE_WHEN_PRIMARY)
    args.extend(extra_args)
    return args


def package_driver_args(entry: MetadataIndexEntry, index: MetadataIndex) -> list[str]:
    """Return the per-package instructions for a verification target.

    Role flags come first, followed by one ``--import-dep-if-present`` entry per
    direct dependency that is itself a verification target, ordered by the
    dependency's declared name.
    """

    settings = entry.verus_metadata
    args: list[str] = []
    if settings.is_core:
        args.append(IS_CORE_ARG)
    if settings.is_vstd:
        args.append(IS_VSTD_ARG)
    if settings.no_vstd:
        args.append(NO_VSTD_ARG)
    for dep in entry.iter_deps():
        if index.get(dep.pkg).verus_metadata.verify:
            args.append(f"{IMPORT_DEP_IF_PRESENT}{dep.name}")
    return args


def derive_directives(index: MetadataIndex) -> list[PackageDirectives]:
    """Return directives for every package in index order."""

    directives: list[PackageDirectives] = []
    for entry in index.entries():
        settings = entry.verus_metadata
        directives.append(
            PackageDirectives(
                package_id=entry.package.canonical_id,
                verify=settings.verify,
                is_builtin=settings.is_builtin,
                is_builtin_macros=settings.is_builtin_macros,
                driver_args=tuple(package_driver_args(entry, index)) if settings.verify else (),
            )
        )
    return directives


__all__ = [
    "PackageDirectives",
    "derive_directives",
    "global_driver_args",
    "package_driver_args",
]
