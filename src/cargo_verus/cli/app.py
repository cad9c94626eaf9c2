# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring argument handling to the orchestrator."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Annotated, Final

import typer

from .. import __version__
from ..command import (
    CargoSubcommand,
    VerusInvocation,
    execute,
    prepare_command,
    split_passthrough,
    strip_subcommand_name,
)
from ..config import Settings
from ..constants import CHECK_FLAG, JUST_VERIFY_FLAG
from ..errors import CargoVerusError
from ..logging import configure_logging, fail

PROG_NAME: Final[str] = "cargo verus"
_SHORT_ALIASES: Final[dict[str, str]] = {"-h": "--help", "-V": "--version"}

_EPILOG: Final[str] = (
    "Options other than those listed are passed to 'cargo build' (default) or "
    "'cargo check' (with --check). Arguments after '--' are passed to 'verus-driver'."
)


@dataclass(slots=True, frozen=True)
class CliState:
    """Values resolved before click parses the front-end arguments."""

    driver_args: tuple[str, ...] = field(default_factory=tuple)


app = typer.Typer(add_completion=False, help="Build or check a cargo workspace with Verus verification.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cargo-verus {__version__}")
        raise typer.Exit()


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": ["--help"],
    },
    epilog=_EPILOG,
)
def verus(
    ctx: typer.Context,
    check: Annotated[bool, typer.Option(CHECK_FLAG, help="Select the 'cargo check' subcommand.")] = False,
    just_verify: Annotated[
        bool,
        typer.Option(JUST_VERIFY_FLAG, help="Skip compilation for primary package(s)."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Print version info and exit.",
        ),
    ] = False,
) -> None:
    """Run cargo with every compilation routed through verus-driver."""

    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    invocation = VerusInvocation(
        subcommand=CargoSubcommand.CHECK if check else CargoSubcommand.BUILD,
        cargo_args=tuple(ctx.args),
        just_verify=just_verify,
        driver_args=state.driver_args,
    )

    try:
        settings = Settings.from_env()
    except CargoVerusError as exc:
        fail(str(exc), use_emoji=False)
        raise typer.Exit(code=1) from exc
    configure_logging(settings.logging_level, use_color=settings.use_color)

    try:
        prepared = prepare_command(invocation, settings)
        returncode = execute(prepared)
    except CargoVerusError as exc:
        fail(str(exc), use_emoji=settings.use_emoji, use_color=settings.use_color)
        raise typer.Exit(code=1) from exc
    raise typer.Exit(code=returncode)


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point accepting both ``cargo-verus`` and ``cargo verus``.

    Click consumes ``--`` itself, so the driver arguments are split off here
    and handed to the command through the context object. The short aliases
    are expanded here rather than registered with click, which would otherwise
    match them inside forwarded clusters such as ``-Zthreads=8``.
    """

    args = strip_subcommand_name(list(sys.argv[1:] if argv is None else argv))
    head, tail = split_passthrough(args)
    head = [_SHORT_ALIASES.get(arg, arg) for arg in head]
    app(args=head, prog_name=PROG_NAME, obj=CliState(driver_args=tuple(tail)))


__all__ = ["CliState", "app", "main"]
