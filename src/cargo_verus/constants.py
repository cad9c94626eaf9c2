# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants describing the driver environment protocol."""

from __future__ import annotations

from typing import Final

DRIVER_NAME: Final[str] = "verus-driver"
DRIVER_VERSION_REQUIREMENT: Final[str] = "==0.1.0"
DRIVER_PATH_ENV: Final[str] = "VERUS_DRIVER_PATH"

METADATA_NAMESPACE: Final[str] = "verus"

CARGO_ENV: Final[str] = "CARGO"
DEFAULT_CARGO: Final[str] = "cargo"
LOG_LEVEL_ENV: Final[str] = "CARGO_VERUS_LOG"
EMOJI_ENV: Final[str] = "CARGO_VERUS_EMOJI"
NO_COLOR_ENV: Final[str] = "NO_COLOR"

# Variables read by the driver.
RUSTC_WRAPPER_ENV: Final[str] = "RUSTC_WRAPPER"
VIA_CARGO_ENV: Final[str] = "__VERUS_DRIVER_VIA_CARGO__"
DEFAULT_LIB_METADATA_ENV: Final[str] = "__CARGO_DEFAULT_LIB_METADATA"
DEFAULT_LIB_METADATA_VALUE: Final[str] = "verus"
GLOBAL_ARGS_ENV: Final[str] = "__VERUS_DRIVER_ARGS__"
PACKAGE_ARGS_ENV_PREFIX: Final[str] = "__VERUS_DRIVER_ARGS_FOR_"
IS_BUILTIN_ENV_PREFIX: Final[str] = "__VERUS_DRIVER_IS_BUILTIN_"
IS_BUILTIN_MACROS_ENV_PREFIX: Final[str] = "__VERUS_DRIVER_IS_BUILTIN_MACROS_"
VERIFY_ENV_PREFIX: Final[str] = "__VERUS_DRIVER_VERIFY_"
FLAG_ENABLED: Final[str] = "1"

ARGS_SEPARATOR: Final[str] = "__VERUS_DRIVER_ARGS_SEP__"

# Instruction tokens understood by the driver.
DRIVER_ARG_PREFIX: Final[str] = "--verus-driver-arg="
VERUS_ARG_PREFIX: Final[str] = "--verus-arg="
COMPILE_WHEN_NOT_PRIMARY: Final[str] = f"{DRIVER_ARG_PREFIX}--compile-when-not-primary-package"
COMPILE_WHEN_PRIMARY: Final[str] = f"{DRIVER_ARG_PREFIX}--compile-when-primary-package"
IMPORT_DEP_IF_PRESENT: Final[str] = f"{DRIVER_ARG_PREFIX}--import-dep-if-present="
DRIVER_VERSION_ARG: Final[str] = f"{DRIVER_ARG_PREFIX}--version"
IS_CORE_ARG: Final[str] = f"{VERUS_ARG_PREFIX}--is-core"
IS_VSTD_ARG: Final[str] = f"{VERUS_ARG_PREFIX}--is-vstd"
NO_VSTD_ARG: Final[str] = f"{VERUS_ARG_PREFIX}--no-vstd"

# Command-line control flags consumed by the front end.
CHECK_FLAG: Final[str] = "--check"
JUST_VERIFY_FLAG: Final[str] = "--just-verify"
PASSTHROUGH_SEPARATOR: Final[str] = "--"
CARGO_SUBCOMMAND_NAME: Final[str] = "verus"

# Flags forwarded to ``cargo metadata`` because they influence resolution.
METADATA_STANDALONE_FLAGS: Final[tuple[str, ...]] = ("--frozen", "--locked", "--offline")
METADATA_VALUED_FLAGS: Final[tuple[str, ...]] = ("--config", "--manifest-path", "-Z")
METADATA_FORMAT_VERSION: Final[str] = "1"

PACKAGE_ID_HASH_LENGTH: Final[int] = 12
