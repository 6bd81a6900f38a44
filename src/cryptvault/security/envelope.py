"""
Vault envelope manager for CryptVault.

Two-layer key scheme:

- key0 (wrapping key) is derived from the password with Argon2id and a fixed
  label (:mod:`cryptvault.security.kdf`). It is never persisted.
- key1 (master key) is random, generated once at initialization, and stored
  only as ``seal(key0, key1)`` in the vault's ``key`` file.

Documents are encrypted under key1, so changing the password only re-wraps
key1 and never touches existing document ciphertexts.

The fixed label means two vaults sharing a password also share key0. That is
tolerated because key0 only ever protects key1, but it gives less
defense-in-depth than a persisted per-vault salt would.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..core.exceptions import AuthenticationFailureError, CorruptVaultError, WrongPasswordError
from ..core.storage import VaultHandle
from . import codec
from .crypto import KEY_SIZE, Buffer, generate_key, seal, unseal
from .kdf import derive_wrapping_key
from .password import hash_password, verify_password
from .secret import SecretBytes

logger = logging.getLogger(__name__)

Password = Union[str, bytes, bytearray, SecretBytes]
MasterKey = Union[bytes, bytearray, SecretBytes]


class VaultEnvelope:
    """
    Orchestrates initialization, unwrap-on-demand and password change for one vault.

    The envelope holds no key material between calls: every operation reads
    the persisted artifacts fresh through its :class:`VaultHandle` and wipes
    the password, key0 and key1 buffers before returning.
    """

    def __init__(self, handle: VaultHandle):
        self.handle = handle

    def is_initialized(self) -> bool:
        return self.handle.exists()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, password: Password, master_key: Optional[MasterKey] = None) -> None:
        """
        Write a fresh password hash and wrapped master key.

        A new random master key is generated unless ``master_key`` is given
        (used when re-wrapping during a password change). Existing artifacts
        are overwritten unconditionally.
        """
        if master_key is None:
            master_key = generate_key()
        with SecretBytes.coerce(password) as pw, SecretBytes.coerce(master_key) as key1:
            if len(key1) != KEY_SIZE:
                raise ValueError(f"master key must be {KEY_SIZE} bytes, got {len(key1)}")

            pw_hash = hash_password(pw.value)
            with SecretBytes(derive_wrapping_key(pw.value)) as key0:
                wrapped = seal(key0.value, key1.value)

        self.handle.write_artifacts(pw_hash, wrapped)
        logger.info("Initialized vault at %s", self.handle.root)

    def authenticate(self, password: Password) -> bool:
        """Check ``password`` against the persisted hash."""
        stored = self.handle.read_password_hash()
        with SecretBytes.coerce(password) as pw:
            ok = verify_password(stored, pw.value)
        if not ok:
            logger.warning("Password verification failed for vault %s", self.handle.root)
        return ok

    def unwrap_master_key(self, password: Password) -> SecretBytes:
        """
        Return the master key as a :class:`SecretBytes`; use it as a context manager.

        Raises WrongPasswordError if the password does not verify. A failure to
        open the wrapped key after the password verified means the vault's
        artifacts disagree and raises CorruptVaultError.
        """
        with SecretBytes.coerce(password) as pw:
            if not self.authenticate(pw):
                raise WrongPasswordError()

            wrapped = self.handle.read_wrapped_key()
            with SecretBytes(derive_wrapping_key(pw.value)) as key0:
                try:
                    key1 = SecretBytes(unseal(key0.value, wrapped))
                except AuthenticationFailureError as e:
                    raise CorruptVaultError(
                        f"wrapped key in {self.handle.wrapped_key_path} failed authentication"
                    ) from e

        if len(key1) != KEY_SIZE:
            key1.wipe()
            raise CorruptVaultError(
                f"wrapped key in {self.handle.wrapped_key_path} has unexpected length"
            )
        return key1

    def change_password(self, old_password: Password, new_password: Password) -> None:
        """Re-wrap the existing master key under ``new_password``."""
        with self.unwrap_master_key(old_password) as key1:
            self.initialize(new_password, key1)
        logger.info("Changed password for vault at %s", self.handle.root)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def encrypt_document(self, password: Password, plaintext: Buffer) -> bytes:
        with self.unwrap_master_key(password) as key1:
            return codec.encrypt_document(key1.value, plaintext)

    def decrypt_document(self, password: Password, ciphertext: Buffer) -> bytes:
        """Raises WrongPasswordError or AuthenticationFailureError (tampered document)."""
        with self.unwrap_master_key(password) as key1:
            return codec.decrypt_document(key1.value, ciphertext)
