"""
Exceptions for CryptVault
This is placed such that there is a general error catcher
"""


class CryptVaultError(Exception):
    # general container for errors
    pass


class WrongPasswordError(CryptVaultError):
    # raised when the password does not match the stored hash
    def __init__(self, message: str = "wrong password"):
        super().__init__(message)


class CorruptVaultError(CryptVaultError):
    # raised when vault artifacts are missing, truncated or fail integrity
    pass


class VaultNotInitializedError(CorruptVaultError):
    # raised when the vault directory holds no artifacts yet
    pass


class AuthenticationFailureError(CryptVaultError):
    # raised on an AEAD tag mismatch (tampered or truncated ciphertext)
    pass
