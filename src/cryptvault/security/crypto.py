"""Authenticated cipher used both to wrap the master key and to encrypt documents.

Blob layout:
- 12 bytes: random nonce
- N bytes: AES-256-GCM ciphertext
- 16 bytes: GCM tag

No associated data is bound. A fresh nonce is drawn for every call to
:func:`seal`, so sealing the same plaintext twice yields different blobs.
"""
import os
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core.exceptions import AuthenticationFailureError


KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16

Buffer = Union[bytes, bytearray, memoryview]


def generate_key() -> bytes:
    return os.urandom(KEY_SIZE)


def _aead(key: Buffer) -> AESGCM:
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
    return AESGCM(key)


def seal(key: Buffer, plaintext: Buffer) -> bytes:
    """Encrypt ``plaintext`` under ``key`` and return ``nonce || ciphertext``."""
    aead = _aead(key)
    nonce = os.urandom(NONCE_SIZE)
    return nonce + aead.encrypt(nonce, bytes(plaintext), None)


def unseal(key: Buffer, blob: Buffer) -> bytes:
    """
    Decrypt a ``nonce || ciphertext`` blob produced by :func:`seal`.

    Raises AuthenticationFailureError when the tag does not verify, which
    covers a wrong key as well as corrupted or truncated input.
    """
    aead = _aead(key)
    blob = bytes(blob)
    if len(blob) < NONCE_SIZE + TAG_SIZE:
        raise AuthenticationFailureError("ciphertext too short to contain nonce and tag")

    nonce, ct = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
    try:
        return aead.decrypt(nonce, ct, None)
    except InvalidTag as e:
        raise AuthenticationFailureError("authentication failed (tag mismatch)") from e
