"""Runtime configuration for delegate_proxy.

Settings come from keyword arguments or from ``DELEGATE_PROXY_*``
environment variables, with a ``.env`` file as fallback.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "DELEGATE_PROXY_"
DEFAULT_ENV_FILE = ".env"


class ProxyConfig(BaseModel):
    logger_name: str = "delegate_proxy.calls"
    log_level: str = "INFO"
    max_argument_length: Optional[int] = Field(default=None, gt=0)
    record_calls: bool = True
    record_timestamps: bool = True
    skip_leading_args: int = Field(default=1, ge=0)

    model_config = {"frozen": True}

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value):
        name = str(value).strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level '{value}'")
        return name

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    def logger(self) -> logging.Logger:
        return logging.getLogger(self.logger_name)

    @classmethod
    def from_env(
        cls,
        env_file: Optional[str | Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ProxyConfig":
        """Build a config from ``DELEGATE_PROXY_*`` variables.

        Values come from ``environ`` (the process environment by default),
        falling back to ``env_file``. Without ``env_file`` a ``.env`` in the
        working directory is used when present. The file never changes the
        process environment.
        """

        path = Path(DEFAULT_ENV_FILE if env_file is None else env_file)
        file_values = dotenv_values(path) if path.is_file() else {}
        source = {**file_values, **(os.environ if environ is None else environ)}

        values = {}
        for name in cls.model_fields:
            raw = source.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None or raw == "":
                continue
            values[name] = raw
        return cls.model_validate(values)
