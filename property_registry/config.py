"""
Runtime settings, read from the environment (and ``.env`` when present).

Variables:
    REGISTRY_OWNER          Contract owner principal (required)
    REGISTRY_START_HEIGHT   Initial ledger block height (default 0)
    REGISTRY_LOG_LEVEL      Logging level name (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .exceptions import ConfigurationError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class RegistrySettings:
    owner: str
    start_height: int = 0
    log_level: str = "INFO"


def load_settings(env_file: str | None = None) -> RegistrySettings:
    """Build settings from the environment.

    Values already present in the process environment win over ``.env``.

    Raises:
        ConfigurationError: a variable is missing or malformed.
    """
    load_dotenv(env_file)

    owner = os.environ.get("REGISTRY_OWNER", "").strip()
    if not owner:
        raise ConfigurationError("REGISTRY_OWNER must name the contract owner principal")

    raw_height = os.environ.get("REGISTRY_START_HEIGHT", "0").strip()
    try:
        start_height = int(raw_height)
    except ValueError:
        raise ConfigurationError(f"REGISTRY_START_HEIGHT is not an integer: {raw_height!r}") from None
    if start_height < 0:
        raise ConfigurationError(f"REGISTRY_START_HEIGHT cannot be negative: {start_height}")

    log_level = os.environ.get("REGISTRY_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"REGISTRY_LOG_LEVEL is not a logging level: {log_level!r}")

    return RegistrySettings(owner=owner, start_height=start_height, log_level=log_level)


def configure_logging(settings: RegistrySettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
