# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pack instruction lists into environment variables read by the driver."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .constants import (
    ARGS_SEPARATOR,
    DEFAULT_LIB_METADATA_ENV,
    DEFAULT_LIB_METADATA_VALUE,
    FLAG_ENABLED,
    GLOBAL_ARGS_ENV,
    IS_BUILTIN_ENV_PREFIX,
    IS_BUILTIN_MACROS_ENV_PREFIX,
    PACKAGE_ARGS_ENV_PREFIX,
    VERIFY_ENV_PREFIX,
    VIA_CARGO_ENV,
)
from .errors import InstructionEncodingError
from .instructions import PackageDirectives


def pack_driver_args(args: Iterable[str]) -> str:
    """Return ``args`` joined into one value, each prefixed by the separator.

    Raises:
        InstructionEncodingError: When an argument contains the reserved separator,
            or ends with a prefix of it that would merge with the next separator.
    """

    packed: list[str] = []
    for arg in args:
        if f"{arg}{ARGS_SEPARATOR}".find(ARGS_SEPARATOR) != len(arg):
            raise InstructionEncodingError(f"Driver argument {arg!r} contains the reserved token {ARGS_SEPARATOR}")
        packed.append(f"{ARGS_SEPARATOR}{arg}")
    return "".join(packed)


def unpack_driver_args(value: str) -> list[str]:
    """Return the ordered argument list encoded by :func:`pack_driver_args`."""

    if not value:
        return []
    if not value.startswith(ARGS_SEPARATOR):
        raise InstructionEncodingError(f"Packed driver arguments must start with {ARGS_SEPARATOR}")
    return value.split(ARGS_SEPARATOR)[1:]


def package_args_var(package_id: str) -> str:
    return f"{PACKAGE_ARGS_ENV_PREFIX}{package_id}"


def is_builtin_var(package_id: str) -> str:
    return f"{IS_BUILTIN_ENV_PREFIX}{package_id}"


def is_builtin_macros_var(package_id: str) -> str:
    return f"{IS_BUILTIN_MACROS_ENV_PREFIX}{package_id}"


def verify_var(package_id: str) -> str:
    return f"{VERIFY_ENV_PREFIX}{package_id}"


def build_driver_env(
    global_args: Sequence[str],
    directives: Iterable[PackageDirectives],
) -> dict[str, str]:
    """Return the protocol variables for one cargo invocation.

    The builtin and verify flags are emitted as standalone variables because
    the driver consults them for packages it otherwise skips, without reading
    the instruction lists whose changes would trigger rebuilds.

    Args:
        global_args: Instructions applied to every compilation unit.
        directives: Per-package directives in deterministic order.

    Returns:
        dict[str, str]: Variables to overlay on the child's environment.
    """

    env: dict[str, str] = {
        VIA_CARGO_ENV: FLAG_ENABLED,
        DEFAULT_LIB_METADATA_ENV: DEFAULT_LIB_METADATA_VALUE,
    }
    if global_args:
        env[GLOBAL_ARGS_ENV] = pack_driver_args(global_args)

    for directive in directives:
        if directive.is_builtin:
            env[is_builtin_var(directive.package_id)] = FLAG_ENABLED
        if directive.is_builtin_macros:
            env[is_builtin_macros_var(directive.package_id)] = FLAG_ENABLED
        if not directive.verify:
            continue
        env[verify_var(directive.package_id)] = FLAG_ENABLED
        if directive.driver_args:
            env[package_args_var(directive.package_id)] = pack_driver_args(directive.driver_args)
    return env


__all__ = [
    "build_driver_env",
    "is_builtin_macros_var",
    "is_builtin_var",
    "pack_driver_args",
    "package_args_var",
    "unpack_driver_args",
    "verify_var",
]
