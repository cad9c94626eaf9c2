# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings resolved from the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, field_validator

from .constants import CARGO_ENV, DEFAULT_CARGO, DRIVER_PATH_ENV, EMOJI_ENV, LOG_LEVEL_ENV, NO_COLOR_ENV
from .errors import SettingsError

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_LOG_LEVELS: Final[tuple[str, ...]] = ("critical", "error", "warning", "info", "debug")


class Settings(BaseModel):
    """Front-end configuration; every field has a usable default."""

    model_config = ConfigDict(frozen=True)

    cargo: str = DEFAULT_CARGO
    driver_path: Path | None = None
    log_level: str = "warning"
    use_emoji: bool = False
    use_color: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        text = str(value).strip().lower()
        if text not in _LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}")
        return text

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to :data:`os.environ`).

        Raises:
            SettingsError: When a variable holds an unusable value.
        """

        env = os.environ if environ is None else environ
        values: dict[str, object] = {
            "use_emoji": env.get(EMOJI_ENV, "").strip().lower() in _TRUTHY,
            "use_color": not env.get(NO_COLOR_ENV),
        }
        if cargo := env.get(CARGO_ENV):
            values["cargo"] = cargo
        if driver_path := env.get(DRIVER_PATH_ENV):
            values["driver_path"] = Path(driver_path)
        if log_level := env.get(LOG_LEVEL_ENV):
            values["log_level"] = log_level
        try:
            return cls.model_validate(values)
        except ValueError as exc:
            raise SettingsError(f"Invalid {LOG_LEVEL_ENV} setting: {exc}") from exc


__all__ = ["Settings"]
