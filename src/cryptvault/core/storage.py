"""
Vault handle: the on-disk layout of a CryptVault vault

Structure Map for reference:
==============================
 - <vault_dir>/
      - pw    (Argon2id password hash, ASCII PHC string)
      - key   (nonce || AES-GCM ciphertext of the master key under key0)
==============================
For reference:
> The handle is the only place that knows file names inside the vault directory
> It never creates or deletes the vault directory itself; that is left to the caller
> Both artifacts are written through a temporary file and renamed into place

"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .exceptions import CorruptVaultError, VaultNotInitializedError

logger = logging.getLogger(__name__)

PASSWORD_HASH_FILE = "pw"
WRAPPED_KEY_FILE = "key"


@dataclass(frozen=True)
class VaultHandle:
    """Explicit reference to one vault directory, passed into every core operation."""

    root: Path

    @classmethod
    def open(cls, root: Union[str, Path]) -> "VaultHandle":
        return cls(Path(root).expanduser())

    @property
    def password_hash_path(self) -> Path:
        return self.root / PASSWORD_HASH_FILE

    @property
    def wrapped_key_path(self) -> Path:
        return self.root / WRAPPED_KEY_FILE

    def exists(self) -> bool:
        """True when both vault artifacts are present."""
        return self.password_hash_path.is_file() and self.wrapped_key_path.is_file()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_password_hash(self) -> bytes:
        try:
            data = self.password_hash_path.read_bytes()
        except FileNotFoundError as e:
            raise VaultNotInitializedError(
                f"vault at {self.root} is not initialized (missing {PASSWORD_HASH_FILE})"
            ) from e
        if not data.strip():
            raise CorruptVaultError(f"password hash file {self.password_hash_path} is empty")
        return data

    def read_wrapped_key(self) -> bytes:
        try:
            return self.wrapped_key_path.read_bytes()
        except FileNotFoundError as e:
            raise CorruptVaultError(
                f"wrapped key file {self.wrapped_key_path} is missing"
            ) from e

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def write_artifacts(self, password_hash: Union[str, bytes], wrapped_key: bytes) -> None:
        """
        Persist both artifacts, replacing any previous ones.

        Both temporary files are fully written before either rename, so a
        failed write leaves the previous vault untouched. The two renames are
        not one atomic step.
        """
        if isinstance(password_hash, str):
            password_hash = password_hash.encode("ascii")

        staged = [
            (self.wrapped_key_path, wrapped_key),
            (self.password_hash_path, password_hash),
        ]
        tmp_paths = []
        try:
            for target, data in staged:
                tmp_path = target.with_name(target.name + ".tmp")
                tmp_paths.append(tmp_path)
                fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                    f.flush()
                    os.fsync(f.fileno())
            for (target, _), tmp_path in zip(staged, tmp_paths):
                os.replace(tmp_path, target)
        except Exception:
            # Clean up temp files on failure
            for tmp_path in tmp_paths:
                if tmp_path.exists():
                    tmp_path.unlink()
            raise

        logger.debug("Wrote vault artifacts to %s", self.root)
