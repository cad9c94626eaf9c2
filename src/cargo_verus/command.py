# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assemble and run the ``cargo build``/``cargo check`` invocation."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .cargo import query_metadata
from .config import Settings
from .constants import CARGO_SUBCOMMAND_NAME, PASSTHROUGH_SEPARATOR, RUSTC_WRAPPER_ENV
from .driver import checked_driver_path
from .env_encoding import build_driver_env
from .errors import CargoVerusError
from .graph import MetadataIndex
from .instructions import derive_directives, global_driver_args
from .models import CargoMetadata
from .process_utils import run_command

LOGGER = logging.getLogger(__name__)

MetadataProvider = Callable[[str, Sequence[str]], CargoMetadata]
DriverLocator = Callable[[Path | None], Path]


class CargoSubcommand(Enum):
    BUILD = "build"
    CHECK = "check"


@dataclass(slots=True, frozen=True)
class VerusInvocation:
    """Arguments split between cargo and the driver."""

    subcommand: CargoSubcommand = CargoSubcommand.BUILD
    cargo_args: tuple[str, ...] = field(default_factory=tuple)
    just_verify: bool = False
    driver_args: tuple[str, ...] = field(default_factory=tuple)

    def global_driver_args(self) -> list[str]:
        return global_driver_args(just_verify=self.just_verify, extra_args=self.driver_args)


@dataclass(slots=True)
class PreparedCommand:
    """Command ready for execution including environment metadata."""

    cmd: list[str]
    env: dict[str, str]


def strip_subcommand_name(args: Sequence[str]) -> list[str]:
    """Drop the ``verus`` token cargo inserts when run as ``cargo verus``."""

    if list(args[:1]) == [CARGO_SUBCOMMAND_NAME]:
        return list(args[1:])
    return list(args)


def split_passthrough(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split ``args`` at the first ``--`` into (front-end args, driver args)."""

    items = list(args)
    if PASSTHROUGH_SEPARATOR not in items:
        return items, []
    position = items.index(PASSTHROUGH_SEPARATOR)
    return items[:position], items[position + 1 :]


def prepare_command(
    invocation: VerusInvocation,
    settings: Settings,
    *,
    metadata_provider: MetadataProvider = query_metadata,
    driver_locator: DriverLocator = checked_driver_path,
    base_env: Mapping[str, str] | None = None,
) -> PreparedCommand:
    """Return the cargo command and environment for ``invocation``.

    The driver version gate runs before the package graph is queried, and any
    failure propagates before a command is returned.

    Args:
        invocation: Parsed command-line invocation.
        settings: Front-end settings.
        metadata_provider: Callable returning the resolved package graph.
        driver_locator: Callable returning a version-checked driver path.
        base_env: Environment to extend; defaults to :data:`os.environ`.

    Returns:
        PreparedCommand: Command line plus the complete child environment.
    """

    driver_path = driver_locator(settings.driver_path)

    metadata = metadata_provider(settings.cargo, invocation.cargo_args)
    index = MetadataIndex.build(metadata)
    directives = derive_directives(index)
    LOGGER.debug(
        "%d of %d packages are verification targets",
        sum(1 for directive in directives if directive.verify),
        len(directives),
    )

    env = dict(os.environ if base_env is None else base_env)
    env[RUSTC_WRAPPER_ENV] = str(driver_path)
    env.update(build_driver_env(invocation.global_driver_args(), directives))

    cmd = [settings.cargo, invocation.subcommand.value, *invocation.cargo_args]
    return PreparedCommand(cmd=cmd, env=env)


def execute(prepared: PreparedCommand) -> int:
    """Run ``prepared`` with inherited stdio and return cargo's exit status.

    Raises:
        CargoVerusError: When cargo is terminated by a signal.
    """

    completed = run_command(prepared.cmd, env=prepared.env, check=False)
    if completed.returncode < 0:
        raise CargoVerusError(
            f"Command {' '.join(prepared.cmd)!r} was terminated by signal {-completed.returncode}"
        )
    return completed.returncode


__all__ = [
    "CargoSubcommand",
    "PreparedCommand",
    "VerusInvocation",
    "execute",
    "prepare_command",
    "split_passthrough",
    "strip_subcommand_name",
]
