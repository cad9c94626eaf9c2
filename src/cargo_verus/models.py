# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models mirroring the resolved graph emitted by ``cargo metadata``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .package_id import make_package_id


class Package(BaseModel):
    """A package record from the ``packages`` array."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    version: str
    manifest_path: str
    metadata: Any = None

    @property
    def canonical_id(self) -> str:
        """Return the environment-safe identifier for this package."""
        return make_package_id(self.name, self.version, self.manifest_path)


class NodeDep(BaseModel):
    """A dependency edge as seen from the dependent package."""

    model_config = ConfigDict(frozen=True)

    name: str
    pkg: str


class Node(BaseModel):
    """Resolved dependencies of a single package."""

    model_config = ConfigDict(frozen=True)

    id: str
    deps: tuple[NodeDep, ...] = Field(default_factory=tuple)


class Resolve(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: tuple[Node, ...] = Field(default_factory=tuple)
    root: str | None = None


class CargoMetadata(BaseModel):
    """Top-level document returned by ``cargo metadata --format-version 1``."""

    model_config = ConfigDict(frozen=True)

    packages: tuple[Package, ...] = Field(default_factory=tuple)
    workspace_members: tuple[str, ...] = Field(default_factory=tuple)
    resolve: Resolve | None = None
    workspace_root: str | None = None


__all__ = ["CargoMetadata", "Node", "NodeDep", "Package", "Resolve"]
