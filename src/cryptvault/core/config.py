"""
Runtime configuration for CryptVault.

Settings come from environment variables so the CLI can be pointed at a
different vault without extra flags:

    CRYPTVAULT_DIR        vault directory (default: ~/.crypt)
    CRYPTVAULT_LOG_LEVEL  logging level name (default: WARNING)

An explicit argument always wins over the environment.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

VAULT_DIR_ENV = "CRYPTVAULT_DIR"
LOG_LEVEL_ENV = "CRYPTVAULT_LOG_LEVEL"

DEFAULT_VAULT_DIRNAME = ".crypt"
DEFAULT_LOG_LEVEL = logging.WARNING

# Suffix appended to the source path when no encrypt destination is given.
ENCRYPTED_SUFFIX = ".crypt"


def resolve_vault_dir(explicit: Optional[Union[str, Path]] = None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    env = os.getenv(VAULT_DIR_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / DEFAULT_VAULT_DIRNAME


def resolve_log_level(explicit: Optional[Union[str, int]] = None) -> int:
    """Return a numeric logging level; unknown names raise ValueError."""
    value = explicit if explicit is not None else os.getenv(LOG_LEVEL_ENV)
    if value is None or value == "":
        return DEFAULT_LOG_LEVEL
    if isinstance(value, int):
        return value
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {value!r}")
    return level


def default_encrypt_destination(src: Union[str, Path]) -> Path:
    return Path(str(src) + ENCRYPTED_SUFFIX)
