"""Scoped holder for secret byte buffers (passwords, wrapping and master keys).

Secrets live in a mutable ``bytearray`` so they can be overwritten in place.
Using a :class:`SecretBytes` as a context manager guarantees the buffer is
zeroed when the block exits, whether it returns normally or raises.

Zeroing is best-effort: libraries that only accept immutable ``bytes`` (the
argon2 bindings, for example) receive a copy that cannot be wiped.
"""
from __future__ import annotations

import hmac
from typing import Union


class SecretBytes:
    def __init__(self, data: Union[bytes, bytearray, memoryview, str]):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._buf: bytearray | None = bytearray(data)

    @classmethod
    def coerce(cls, value: Union["SecretBytes", bytes, bytearray, str]) -> "SecretBytes":
        """Return ``value`` wrapped in a fresh SecretBytes (copies existing secrets)."""
        if isinstance(value, SecretBytes):
            return cls(value.value)
        return cls(value)

    @property
    def value(self) -> bytearray:
        """The live buffer. Raises if the secret has already been wiped."""
        if self._buf is None:
            raise RuntimeError("Secret has been wiped")
        return self._buf

    @property
    def wiped(self) -> bool:
        return self._buf is None

    def __bytes__(self) -> bytes:
        return bytes(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __eq__(self, other) -> bool:
        if isinstance(other, SecretBytes):
            other = other.value
        if not isinstance(other, (bytes, bytearray)):
            return NotImplemented
        return hmac.compare_digest(bytes(self.value), bytes(other))

    __hash__ = None

    def __repr__(self) -> str:
        state = "wiped" if self._buf is None else f"{len(self._buf)} bytes"
        return f"SecretBytes(<redacted, {state}>)"

    def wipe(self) -> None:
        """Overwrite the buffer with zeros and drop the reference."""
        try:
            if self._buf is not None:
                for i in range(len(self._buf)):
                    self._buf[i] = 0
        finally:
            self._buf = None

    def __enter__(self) -> "SecretBytes":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()
