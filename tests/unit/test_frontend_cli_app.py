"""Unit tests for the crypt command line front end."""

import json

import pytest
from unittest.mock import patch

from cryptvault.frontend.cli import app
from cryptvault.frontend.cli.app import PasswordMismatchError, main, read_password_with_confirm


@pytest.fixture
def vault_dir(tmp_path):
    return tmp_path / "vault"


@pytest.fixture
def prompts():
    """Feed getpass answers in order."""
    with patch("cryptvault.frontend.cli.app.getpass.getpass") as mock_getpass:
        def feed(*answers):
            mock_getpass.reset_mock()
            mock_getpass.side_effect = list(answers)
            return mock_getpass
        yield feed


def run(vault_dir, *argv):
    return main(["--vault-dir", str(vault_dir), *argv])


# ==============================================================================
# Tests: Password prompting
# ==============================================================================

def test_read_password_with_confirm_match(prompts):
    prompts("secret", "secret")
    assert read_password_with_confirm("password") == "secret"


def test_read_password_with_confirm_mismatch(prompts):
    prompts("secret", "secreT")
    with pytest.raises(PasswordMismatchError, match="did not match"):
        read_password_with_confirm("password")


def test_read_password_with_confirm_empty(prompts):
    prompts("", "")
    with pytest.raises(ValueError, match="empty"):
        read_password_with_confirm("password")


# ==============================================================================
# Tests: Commands
# ==============================================================================

def test_help(capsys):
    assert main([]) == 0
    assert "usage: crypt" in capsys.readouterr().out
    assert main(["help"]) == 0


def test_init(vault_dir, prompts, capsys):
    prompts("Password1!!", "Password1!!")
    assert run(vault_dir, "init") == 0
    assert (vault_dir / "pw").exists()
    assert (vault_dir / "key").exists()
    assert "Initialized vault" in capsys.readouterr().out


def test_init_mismatched_confirmation(vault_dir, prompts, capsys):
    prompts("Password1!!", "Password2!!")
    assert run(vault_dir, "init") == 1
    assert not (vault_dir / "pw").exists()
    assert "did not match" in capsys.readouterr().err


def test_init_refuses_to_overwrite(vault_dir, prompts, capsys):
    prompts("Password1!!", "Password1!!")
    run(vault_dir, "init")
    key_before = (vault_dir / "key").read_bytes()

    mock_getpass = prompts("Other1!!", "Other1!!")
    assert run(vault_dir, "init") == 1
    assert "already initialized" in capsys.readouterr().err
    mock_getpass.assert_not_called()
    assert (vault_dir / "key").read_bytes() == key_before


def test_init_force_overwrites(vault_dir, prompts):
    prompts("Password1!!", "Password1!!")
    run(vault_dir, "init")
    key_before = (vault_dir / "key").read_bytes()

    prompts("Other1!!", "Other1!!")
    assert run(vault_dir, "init", "--force") == 0
    assert (vault_dir / "key").read_bytes() != key_before


def test_encrypt_decrypt_files(vault_dir, prompts, tmp_path):
    prompts("Password1!!", "Password1!!")
    run(vault_dir, "init")

    src = tmp_path / "note.txt"
    src.write_bytes(b"hello crypt!")

    prompts("Password1!!")
    assert run(vault_dir, "encrypt", str(src)) == 0
    enc = tmp_path / "note.txt.crypt"
    assert enc.exists()
    assert b"hello crypt!" not in enc.read_bytes()

    out = tmp_path / "note.out"
    prompts("Password1!!")
    assert run(vault_dir, "decrypt", str(enc), str(out)) == 0
    assert out.read_bytes() == b"hello crypt!"


def test_encrypt_explicit_destination(vault_dir, prompts, tmp_path):
    prompts("Password1!!", "Password1!!")
    run(vault_dir, "init")
    src = tmp_path / "a.bin"
    src.write_bytes(b"\x00\x01")
    dst = tmp_path / "custom.enc"

    prompts("Password1!!")
    assert run(vault_dir, "encrypt", str(src), str(dst)) == 0
    assert dst.exists()
    assert not (tmp_path / "a.bin.crypt").exists()


def test_decrypt_wrong_password(vault_dir, prompts, tmp_path, capsys):
    prompts("Password1!!", "Password1!!")
    run(vault_dir, "init")
    src = tmp_path / "doc"
    src.write_bytes(b"data")
    prompts("Password1!!")
    run(vault_dir, "encrypt", str(src))

    out = tmp_path / "doc.out"
    prompts("Password2!!")
    assert run(vault_dir, "decrypt", str(tmp_path / "doc.crypt"), str(out)) == 1
    assert "wrong password" in capsys.readouterr().err
    assert not out.exists()


def test_encrypt_missing_source(vault_dir, prompts, tmp_path, capsys):
    prompts("Password1!!", "Password1!!")
    run(vault_dir, "init")
    prompts("Password1!!")
    assert run(vault_dir, "encrypt", str(tmp_path / "nope")) == 1
    assert "error:" in capsys.readouterr().err


def test_encrypt_uninitialized_vault(vault_dir, prompts, tmp_path, capsys):
    src = tmp_path / "doc"
    src.write_bytes(b"data")
    prompts("Password1!!")
    assert run(vault_dir, "encrypt", str(src)) == 1
    assert "not initialized" in capsys.readouterr().err


@pytest.mark.parametrize("command", ["change-password", "change_password"])
def test_change_password(vault_dir, prompts, tmp_path, command):
    prompts("Password1!!", "Password1!!")
    run(vault_dir, "init")
    src = tmp_path / "doc"
    src.write_bytes(b"data")
    prompts("Password1!!")
    run(vault_dir, "encrypt", str(src))

    prompts("Password1!!", "Password2!!", "Password2!!")
    assert run(vault_dir, command) == 0

    out = tmp_path / "doc.out"
    prompts("Password2!!")
    assert run(vault_dir, "decrypt", str(tmp_path / "doc.crypt"), str(out)) == 0
    assert out.read_bytes() == b"data"


def test_info(vault_dir, capsys):
    assert run(vault_dir, "info") == 0
    info = json.loads(capsys.readouterr().out)
    assert info["vault"] == str(vault_dir)
    assert info["initialized"] is False
    assert info["kdf"]["algo"] == "argon2id"


def test_verbose_sets_info_level(vault_dir):
    with patch.object(app, "configure_logging") as mock_configure:
        run(vault_dir, "-v", "info")
    mock_configure.assert_called_once_with(app.logging.INFO)


def test_bad_log_level_env(vault_dir, monkeypatch, capsys):
    monkeypatch.setenv("CRYPTVAULT_LOG_LEVEL", "chatty")
    assert run(vault_dir, "info") == 1
    assert "unknown log level" in capsys.readouterr().err
