# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Derive environment-variable-safe identifiers for resolved packages."""

from __future__ import annotations

import hashlib

from .constants import PACKAGE_ID_HASH_LENGTH


def manifest_path_digest(manifest_path: str) -> str:
    """Return the hex SHA-256 digest of ``manifest_path``.

    Args:
        manifest_path: Absolute path of the package's ``Cargo.toml``.

    Returns:
        str: Full 64-character hexadecimal digest.
    """

    return hashlib.sha256(manifest_path.encode("utf-8")).hexdigest()


def make_package_id(name: str, version: str, manifest_path: str) -> str:
    """Return the canonical ``name-version-hashprefix`` key for a package.

    Two packages that share ``name`` and ``version`` (path dependencies
    vendored twice, for example) still receive distinct keys because the
    manifest path participates through its digest. Only the first
    ``PACKAGE_ID_HASH_LENGTH`` hex characters are kept to bound environment
    variable name length, which leaves a 48-bit collision space between
    distinct manifest paths.

    Args:
        name: Package name as declared in its manifest.
        version: Package version rendered as a string.
        manifest_path: Absolute path of the package's ``Cargo.toml``.

    Returns:
        str: Deterministic identifier suitable for embedding in variable names.
    """

    prefix = manifest_path_digest(manifest_path)[:PACKAGE_ID_HASH_LENGTH]
    return f"{name}-{version}-{prefix}"


__all__ = ["make_package_id", "manifest_path_digest"]
