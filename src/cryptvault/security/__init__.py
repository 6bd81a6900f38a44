"""Security helpers: password hashing, KDF, AEAD and the vault envelope for CryptVault.

This package provides:
- Argon2id password hashing for the stored ``pw`` artifact
- Argon2id wrapping-key derivation from the password and a fixed label
- AES-256-GCM sealing with a random nonce prefix
- The two-layer vault envelope (password -> key0 -> key1 -> documents)
"""

from .kdf import derive_wrapping_key, kdf_params_to_dict
from .password import hash_password, verify_password
from .crypto import generate_key, seal, unseal
from .secret import SecretBytes
from .codec import encrypt_document, decrypt_document
from .envelope import VaultEnvelope

__all__ = [
    "derive_wrapping_key",
    "kdf_params_to_dict",
    "hash_password",
    "verify_password",
    "generate_key",
    "seal",
    "unseal",
    "SecretBytes",
    "encrypt_document",
    "decrypt_document",
    "VaultEnvelope",
]
