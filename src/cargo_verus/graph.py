# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Queryable index over the resolved package graph."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from .errors import GraphConsistencyError
from .metadata import VerusMetadata, parse_verus_metadata
from .models import CargoMetadata, Node, NodeDep, Package

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class MetadataIndexEntry:
    """Bundle of a package, its Verus settings, and its direct dependencies.

    ``deps`` maps each declared dependency name to its edge and is kept in
    sorted name order.
    """

    package: Package
    verus_metadata: VerusMetadata
    deps: Mapping[str, NodeDep]

    def iter_deps(self) -> Iterator[NodeDep]:
        """Yield dependency edges ordered by declared dependency name."""
        yield from self.deps.values()


class MetadataIndex:
    """Immutable lookup table built once from a fully resolved graph."""

    def __init__(self, entries: Mapping[str, MetadataIndexEntry]) -> None:
        self._entries = {key: entries[key] for key in sorted(entries)}

    @classmethod
    def build(cls, metadata: CargoMetadata) -> MetadataIndex:
        """Return an index over ``metadata``.

        Args:
            metadata: Document produced by ``cargo metadata`` including ``resolve``.

        Returns:
            MetadataIndex: Index with exactly one entry per package.

        Raises:
            GraphConsistencyError: When the graph lacks a resolve section, lists a
                package or node twice, declares two dependencies under one name,
                or references a package that is not listed.
            MetadataConfigError: When a package carries malformed Verus settings.
        """

        if metadata.resolve is None:
            raise GraphConsistencyError("cargo metadata output is missing the 'resolve' section")

        deps_by_package: dict[str, dict[str, NodeDep]] = {}
        for node in metadata.resolve.nodes:
            if node.id in deps_by_package:
                raise GraphConsistencyError(f"Resolved node {node.id!r} appears more than once")
            deps_by_package[node.id] = _collect_deps(node)

        entries: dict[str, MetadataIndexEntry] = {}
        for package in metadata.packages:
            if package.id in entries:
                raise GraphConsistencyError(f"Package {package.id!r} appears more than once")
            deps = deps_by_package.pop(package.id, None)
            if deps is None:
                raise GraphConsistencyError(f"Package {package.id!r} has no resolved dependency node")
            entries[package.id] = MetadataIndexEntry(
                package=package,
                verus_metadata=parse_verus_metadata(package),
                deps=deps,
            )

        if deps_by_package:
            orphans = ", ".join(sorted(deps_by_package))
            raise GraphConsistencyError(f"Resolved nodes without a matching package: {orphans}")

        for entry in entries.values():
            for dep in entry.iter_deps():
                if dep.pkg not in entries:
                    raise GraphConsistencyError(
                        f"Package {entry.package.id!r} depends on unknown package {dep.pkg!r} (as {dep.name!r})"
                    )

        LOGGER.debug("indexed %d packages", len(entries))
        return cls(entries)

    def get(self, package_id: str) -> MetadataIndexEntry:
        """Return the entry for ``package_id``.

        Any id reachable through a dependency edge is guaranteed to resolve; a
        ``KeyError`` here indicates a programming error.
        """

        return self._entries[package_id]

    def entries(self) -> Iterator[MetadataIndexEntry]:
        """Yield entries ordered by package id."""
        yield from self._entries.values()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, package_id: object) -> bool:
        return package_id in self._entries


def _collect_deps(node: Node) -> dict[str, NodeDep]:
    deps: dict[str, NodeDep] = {}
    for dep in node.deps:
        if dep.name in deps:
            raise GraphConsistencyError(f"Package {node.id!r} declares dependency {dep.name!r} more than once")
        deps[dep.name] = dep
    return {name: deps[name] for name in sorted(deps)}


__all__ = ["MetadataIndex", "MetadataIndexEntry"]
