"""CryptVault: password-unlocked document encryption vault."""

from .core.exceptions import (
    CryptVaultError,
    WrongPasswordError,
    CorruptVaultError,
    VaultNotInitializedError,
    AuthenticationFailureError,
)
from .core.storage import VaultHandle
from .security.envelope import VaultEnvelope

__version__ = "0.1.0"

__all__ = [
    "CryptVaultError",
    "WrongPasswordError",
    "CorruptVaultError",
    "VaultNotInitializedError",
    "AuthenticationFailureError",
    "VaultHandle",
    "VaultEnvelope",
]
