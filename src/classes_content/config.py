"""
Configuration for content resolution.

Values come from explicit arguments or from the environment
(`CLASSES_CONTENT_*` variables, optionally loaded from a `.env` file by the
server entry point).
"""

from __future__ import annotations

import logging
import os
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger("classes-content")

DEFAULT_RAW_BASES = [
    "https://raw.githubusercontent.com/Moze75/Ultimate_Tracker/main/Classes",
    "https://raw.githubusercontent.com/Moze75/Ultimate_Tracker/master/Classes",
]
NEGATIVE_TTL_SECONDS = 5 * 60
DEFAULT_TIMEOUT = 30.0

ENV_BASES = "CLASSES_CONTENT_BASES"
ENV_NEGATIVE_TTL = "CLASSES_CONTENT_NEGATIVE_TTL"
ENV_TIMEOUT = "CLASSES_CONTENT_TIMEOUT"
ENV_DEBUG = "CLASSES_CONTENT_DEBUG"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ContentConfig(BaseModel):
    """Settings for the content loader.

    Attributes:
        raw_bases: Repository roots, tried in order for every folder variant
        negative_ttl: Seconds a failed location is skipped before being retried
        request_timeout: Transport timeout for each GET, in seconds
        debug: Log every candidate outcome at DEBUG level
    """
    raw_bases: list[str] = Field(default_factory=lambda: list(DEFAULT_RAW_BASES))
    negative_ttl: float = Field(default=NEGATIVE_TTL_SECONDS, ge=0)
    request_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    debug: bool = False

    @field_validator("raw_bases")
    @classmethod
    def _check_bases(cls, value: list[str]) -> list[str]:
        bases = [b.strip().rstrip("/") for b in value if b and b.strip()]
        if not bases:
            raise ValueError("at least one repository root is required")
        for base in bases:
            if not base.startswith(("http://", "https://")):
                raise ValueError(f"repository root must be an http(s) URL: {base}")
        return bases

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ContentConfig":
        """Build a configuration from environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        bases = env.get(ENV_BASES)
        if bases is not None:
            values["raw_bases"] = [b for b in bases.split(",") if b.strip()]

        for key, field_name in ((ENV_NEGATIVE_TTL, "negative_ttl"), (ENV_TIMEOUT, "request_timeout")):
            raw = env.get(key)
            if raw is None or not raw.strip():
                continue
            try:
                values[field_name] = float(raw)
            except ValueError:
                raise ConfigError(f"{key} must be a number, got '{raw}'") from None

        debug = env.get(ENV_DEBUG)
        if debug is not None:
            flag = debug.strip().lower()
            if flag in _TRUE_VALUES:
                values["debug"] = True
            elif flag in _FALSE_VALUES:
                values["debug"] = False
            else:
                raise ConfigError(f"{ENV_DEBUG} must be a boolean flag, got '{debug}'")

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid content configuration: {e}", details={"values": values}) from e

    def apply_logging(self) -> None:
        """Lower the package logger to DEBUG when the debug flag is set."""
        if self.debug:
            logger.setLevel(logging.DEBUG)
