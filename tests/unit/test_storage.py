"""
Unit tests for the VaultHandle on-disk layout.
"""

import os
import pytest
from pathlib import Path
from unittest.mock import patch

from cryptvault.core.exceptions import CorruptVaultError, VaultNotInitializedError
from cryptvault.core.storage import VaultHandle


@pytest.fixture
def handle(tmp_path):
    return VaultHandle.open(tmp_path)


def test_paths(handle, tmp_path):
    assert handle.root == tmp_path
    assert handle.password_hash_path == tmp_path / "pw"
    assert handle.wrapped_key_path == tmp_path / "key"


def test_open_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    h = VaultHandle.open("~/vault")
    assert h.root == tmp_path / "vault"


def test_exists_requires_both_files(handle):
    assert not handle.exists()
    handle.password_hash_path.write_text("hash")
    assert not handle.exists()
    handle.wrapped_key_path.write_bytes(b"key")
    assert handle.exists()


def test_write_and_read_artifacts(handle):
    handle.write_artifacts("$argon2id$hash", b"\x00wrapped\xff")

    assert handle.read_password_hash() == b"$argon2id$hash"
    assert handle.read_wrapped_key() == b"\x00wrapped\xff"
    # no temp files remain
    assert sorted(p.name for p in handle.root.iterdir()) == ["key", "pw"]


def test_write_artifacts_overwrites(handle):
    handle.write_artifacts("first", b"one")
    handle.write_artifacts(b"second", b"two")
    assert handle.read_password_hash() == b"second"
    assert handle.read_wrapped_key() == b"two"


@pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
def test_write_artifacts_private_mode(handle):
    handle.write_artifacts("h", b"k")
    assert handle.password_hash_path.stat().st_mode & 0o077 == 0
    assert handle.wrapped_key_path.stat().st_mode & 0o077 == 0


def test_write_failure_leaves_previous_vault(handle):
    handle.write_artifacts("old-hash", b"old-key")

    def failing_replace(src, dst):
        raise OSError("disk full")

    with patch("cryptvault.core.storage.os.replace", side_effect=failing_replace):
        with pytest.raises(OSError, match="disk full"):
            handle.write_artifacts("new-hash", b"new-key")

    assert handle.read_password_hash() == b"old-hash"
    assert handle.read_wrapped_key() == b"old-key"
    assert not list(handle.root.glob("*.tmp"))


def test_read_password_hash_missing(handle):
    with pytest.raises(VaultNotInitializedError, match="not initialized"):
        handle.read_password_hash()


def test_missing_vault_is_a_corrupt_vault(handle):
    with pytest.raises(CorruptVaultError):
        handle.read_password_hash()


def test_read_password_hash_empty(handle):
    handle.password_hash_path.write_bytes(b"\n")
    with pytest.raises(CorruptVaultError, match="empty"):
        handle.read_password_hash()


def test_read_wrapped_key_missing(handle):
    with pytest.raises(CorruptVaultError, match="missing"):
        handle.read_wrapped_key()


def test_other_io_errors_propagate(handle):
    with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
        with pytest.raises(PermissionError):
            handle.read_password_hash()
