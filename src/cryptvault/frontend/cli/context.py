"""Small helper to build a CryptVault context for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from cryptvault.core.config import resolve_vault_dir
from cryptvault.core.storage import VaultHandle
from cryptvault.security.envelope import VaultEnvelope

logger = logging.getLogger(__name__)

VAULT_DIR_MODE = 0o770


@dataclass
class CliContext:
    """Container for runtime objects the commands need."""

    handle: VaultHandle
    envelope: VaultEnvelope


def build_context(vault_dir: Optional[str | Path] = None) -> CliContext:
    """
    Resolve the vault directory, make sure it exists and wire up the envelope.

    The directory comes from ``vault_dir`` when given, otherwise from the
    ``CRYPTVAULT_DIR`` environment variable, otherwise ``~/.crypt``.
    """
    root = resolve_vault_dir(vault_dir)
    if not root.exists():
        logger.info("Creating vault directory %s", root)
    root.mkdir(mode=VAULT_DIR_MODE, parents=True, exist_ok=True)

    handle = VaultHandle.open(root)
    return CliContext(handle=handle, envelope=VaultEnvelope(handle))
