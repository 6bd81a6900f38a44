"""Document codec: encrypts arbitrary document bytes under the unwrapped master key.

The output carries no metadata beyond the nonce prefix added by
:func:`cryptvault.security.crypto.seal`.
"""
from __future__ import annotations

import logging

from .crypto import Buffer, seal, unseal

logger = logging.getLogger(__name__)


def encrypt_document(master_key: Buffer, plaintext: Buffer) -> bytes:
    blob = seal(master_key, plaintext)
    logger.debug("Encrypted document (%d -> %d bytes)", len(plaintext), len(blob))
    return blob


def decrypt_document(master_key: Buffer, ciphertext: Buffer) -> bytes:
    """Raises AuthenticationFailureError if ``ciphertext`` was tampered with."""
    plaintext = unseal(master_key, ciphertext)
    logger.debug("Decrypted document (%d -> %d bytes)", len(ciphertext), len(plaintext))
    return plaintext
