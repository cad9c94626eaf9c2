# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for canonical package identifiers."""

from __future__ import annotations

import hashlib
import re

from cargo_verus.package_id import make_package_id, manifest_path_digest


def test_package_id_uses_sha256_prefix_of_manifest_path() -> None:
    path = "/ws/app/Cargo.toml"
    expected = hashlib.sha256(path.encode("utf-8")).hexdigest()[:12]

    assert make_package_id("app", "0.1.0", path) == f"app-0.1.0-{expected}"


def test_package_id_is_deterministic() -> None:
    first = make_package_id("vstd", "0.1.0", "/ws/vstd/Cargo.toml")
    second = make_package_id("vstd", "0.1.0", "/ws/vstd/Cargo.toml")

    assert first == second
    assert re.fullmatch(r"vstd-0\.1\.0-[0-9a-f]{12}", first)


def test_package_id_distinguishes_manifest_paths() -> None:
    ids = {make_package_id("dup", "1.0.0", f"/ws/vendor/copy{index}/Cargo.toml") for index in range(2000)}

    assert len(ids) == 2000


def test_manifest_path_digest_is_full_length() -> None:
    assert len(manifest_path_digest("/ws/app/Cargo.toml")) == 64
