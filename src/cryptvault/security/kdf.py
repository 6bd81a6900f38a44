"""Security package of CryptVault."""
from typing import Dict

from argon2.low_level import Type, hash_secret_raw

# Fixed, non-secret derivation label. Used in place of a per-vault salt so the
# wrapping key can be recomputed from the password alone.
KEY0_LABEL = b"cryptvault-key0"

TIME_COST = 1
MEMORY_COST = 64 * 1024
PARALLELISM = 4
KEY_LEN = 32


def derive_wrapping_key(
    password: bytes,
    time_cost: int = TIME_COST,
    memory_cost: int = MEMORY_COST,
    parallelism: int = PARALLELISM,
    key_len: int = KEY_LEN,
) -> bytes:
    """
    Derive the wrapping key (key0) from a password using Argon2id.
    Returns raw derived key bytes; the same password always yields the same key.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")

    return hash_secret_raw(
        secret=bytes(password),
        salt=KEY0_LABEL,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=key_len,
        type=Type.ID,
    )


def kdf_params_to_dict(
    time_cost: int = TIME_COST,
    memory_cost: int = MEMORY_COST,
    parallelism: int = PARALLELISM,
) -> Dict:
    return {
        "algo": "argon2id",
        "label": KEY0_LABEL.decode("ascii"),
        "time": time_cost,
        "memory": memory_cost,
        "parallelism": parallelism,
        "key_len": KEY_LEN,
    }
