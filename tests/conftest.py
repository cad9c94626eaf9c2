# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import pytest

from cargo_verus.models import CargoMetadata

PackageFactory = Callable[..., dict[str, Any]]
MetadataFactory = Callable[..., CargoMetadata]


def _package_id(name: str, version: str) -> str:
    return f"path+file:///ws/{name}#{name}@{version}"


@pytest.fixture
def package_factory() -> PackageFactory:
    """Return a builder for ``packages`` entries as emitted by ``cargo metadata``."""

    def _build(
        name: str,
        version: str = "0.1.0",
        *,
        manifest_path: str | None = None,
        verus: Any = None,
        metadata: Any = None,
    ) -> dict[str, Any]:
        block = metadata
        if verus is not None:
            block = {**(metadata or {}), "verus": verus}
        return {
            "id": _package_id(name, version),
            "name": name,
            "version": version,
            "manifest_path": manifest_path or f"/ws/{name}/Cargo.toml",
            "metadata": block,
        }

    return _build


@pytest.fixture
def metadata_factory() -> MetadataFactory:
    """Return a builder producing :class:`CargoMetadata` from packages and named edges.

    ``deps`` maps a package id to ``(declared name, target package id)`` pairs.
    Packages absent from ``deps`` get an empty node.
    """

    def _build(
        packages: Sequence[Mapping[str, Any]],
        deps: Mapping[str, Sequence[tuple[str, str]]] | None = None,
    ) -> CargoMetadata:
        edges = deps or {}
        nodes = [
            {
                "id": package["id"],
                "deps": [{"name": name, "pkg": target} for name, target in edges.get(package["id"], ())],
            }
            for package in packages
        ]
        return CargoMetadata.model_validate({"packages": list(packages), "resolve": {"nodes": nodes}})

    return _build


@pytest.fixture
def workspace_metadata(package_factory: PackageFactory, metadata_factory: MetadataFactory) -> CargoMetadata:
    """Return a small workspace mixing verified and plain crates.

    ``app`` depends on ``lib_a`` (verified), ``vstd`` (verified) and ``serde``
    (plain); ``vstd`` depends on the builtin crates.
    """

    app = package_factory("app", verus={"verify": True})
    lib_a = package_factory("lib_a", verus={"verify": True, "no-vstd": True})
    vstd = package_factory("vstd", verus={"verify": True, "is-vstd": True})
    builtin = package_factory("builtin", verus={"is-builtin": True})
    builtin_macros = package_factory("builtin_macros", verus={"is-builtin-macros": True})
    serde = package_factory("serde", "1.0.200", manifest_path="/registry/serde-1.0.200/Cargo.toml")
    return metadata_factory(
        [app, lib_a, vstd, builtin, builtin_macros, serde],
        {
            app["id"]: [("vstd", vstd["id"]), ("serde", serde["id"]), ("lib_a", lib_a["id"])],
            lib_a["id"]: [("vstd", vstd["id"])],
            vstd["id"]: [("builtin", builtin["id"]), ("builtin_macros", builtin_macros["id"])],
        },
    )
