"""Password hashing and verification for the vault's ``pw`` artifact.

Hashes are Argon2id PHC strings produced by :class:`argon2.PasswordHasher`
(``$argon2id$v=19$m=...,t=...,p=...$<salt>$<digest>``), so each stored hash
carries its own salt and cost parameters.
"""
from __future__ import annotations

import logging
from typing import Union

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from ..core.exceptions import CorruptVaultError

logger = logging.getLogger(__name__)

# Library defaults are the fixed cost factors.
_hasher = PasswordHasher()


def _as_bytes(password: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def hash_password(password: Union[str, bytes, bytearray]) -> str:
    """Return a salted Argon2id hash of ``password``; a new salt is drawn each call."""
    return _hasher.hash(_as_bytes(password))


def verify_password(stored_hash: Union[str, bytes], candidate: Union[str, bytes, bytearray]) -> bool:
    """
    Check ``candidate`` against ``stored_hash``.

    Returns False on a mismatch. Raises CorruptVaultError if the stored hash
    cannot be decoded or verification fails for any reason other than a
    mismatch.
    """
    if isinstance(stored_hash, (bytes, bytearray)):
        try:
            stored_hash = bytes(stored_hash).decode("ascii")
        except UnicodeDecodeError as e:
            raise CorruptVaultError("password hash is not valid ASCII") from e

    stored_hash = stored_hash.strip()
    try:
        return _hasher.verify(stored_hash, _as_bytes(candidate))
    except VerifyMismatchError:
        return False
    except InvalidHashError as e:
        raise CorruptVaultError("password hash is malformed") from e
    except VerificationError as e:
        logger.error("Password hash verification failed: %s", e)
        raise CorruptVaultError("password hash could not be verified") from e
