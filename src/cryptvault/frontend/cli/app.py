"""Command line front end for CryptVault.

Start here with `python -m cryptvault.frontend.cli.app` or the ``crypt`` script.
The commands only do prompting and file I/O; all cryptography goes through
:class:`cryptvault.security.envelope.VaultEnvelope`.
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cryptvault.core.config import default_encrypt_destination, resolve_log_level
from cryptvault.core.exceptions import CryptVaultError
from cryptvault.frontend.cli.context import CliContext, build_context
from cryptvault.frontend.cli.logging_config import configure_logging
from cryptvault.security.kdf import kdf_params_to_dict

logger = logging.getLogger(__name__)


class PasswordMismatchError(ValueError):
    pass


def read_password(prompt: str) -> str:
    return getpass.getpass(f"{prompt}: ")


def read_password_with_confirm(prompt: str) -> str:
    pw = read_password(prompt)
    confirm = read_password(f"{prompt} (confirm)")
    if pw != confirm:
        raise PasswordMismatchError("passwords did not match")
    if not pw:
        raise ValueError("password must not be empty")
    return pw


# === Commands ===


def cmd_init(ctx: CliContext, args: argparse.Namespace) -> int:
    if ctx.envelope.is_initialized() and not args.force:
        print(
            f"Vault at {ctx.handle.root} is already initialized; "
            "re-initializing would make existing documents unreadable. "
            "Use --force to overwrite.",
            file=sys.stderr,
        )
        return 1
    pw = read_password_with_confirm("password")
    ctx.envelope.initialize(pw)
    print(f"Initialized vault at {ctx.handle.root}")
    return 0


def cmd_encrypt(ctx: CliContext, args: argparse.Namespace) -> int:
    src = Path(args.src)
    dst = Path(args.dst) if args.dst else default_encrypt_destination(src)
    pw = read_password("password")

    plaintext = src.read_bytes()
    blob = ctx.envelope.encrypt_document(pw, plaintext)
    dst.write_bytes(blob)
    logger.info("Encrypted %s -> %s", src, dst)
    return 0


def cmd_decrypt(ctx: CliContext, args: argparse.Namespace) -> int:
    src = Path(args.src)
    dst = Path(args.dst)
    pw = read_password("password")

    ciphertext = src.read_bytes()
    plaintext = ctx.envelope.decrypt_document(pw, ciphertext)
    dst.write_bytes(plaintext)
    logger.info("Decrypted %s -> %s", src, dst)
    return 0


def cmd_change_password(ctx: CliContext, args: argparse.Namespace) -> int:
    old = read_password("old password")
    new = read_password_with_confirm("new password")
    ctx.envelope.change_password(old, new)
    print("Password changed")
    return 0


def cmd_info(ctx: CliContext, args: argparse.Namespace) -> int:
    info = {
        "vault": str(ctx.handle.root),
        "initialized": ctx.envelope.is_initialized(),
        "kdf": kdf_params_to_dict(),
    }
    print(json.dumps(info, indent=2))
    return 0


COMMANDS = {
    "init": cmd_init,
    "encrypt": cmd_encrypt,
    "decrypt": cmd_decrypt,
    "change-password": cmd_change_password,
    "change_password": cmd_change_password,
    "info": cmd_info,
}


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crypt",
        description="CLI for encryption and decryption of documents.",
    )
    parser.add_argument(
        "--vault-dir",
        default=None,
        help="Vault directory (default: $CRYPTVAULT_DIR or ~/.crypt)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress at INFO level",
    )
    sub = parser.add_subparsers(dest="command")

    p_init = sub.add_parser("init", help="Initialise the crypt vault.")
    p_init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an already initialized vault",
    )

    p_enc = sub.add_parser(
        "encrypt",
        help="Encrypt the document at srcpath and store the result at dstpath.",
    )
    p_enc.add_argument("src", help="Path of the document to encrypt")
    p_enc.add_argument(
        "dst",
        nargs="?",
        default=None,
        help='Destination path (default: src + ".crypt")',
    )

    p_dec = sub.add_parser(
        "decrypt",
        help="Decrypt the document at srcpath and store the result at dstpath.",
    )
    p_dec.add_argument("src", help="Path of the encrypted document")
    p_dec.add_argument("dst", help="Destination path for the plaintext")

    sub.add_parser(
        "change-password",
        aliases=["change_password"],
        help="Change the crypt vault password.",
    )
    sub.add_parser("info", help="Show vault location and key derivation settings.")
    sub.add_parser("help", help="Print this help.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    if args.command is None or args.command == "help":
        parser.print_help()
        return 0

    try:
        level = logging.INFO if args.verbose else resolve_log_level()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    configure_logging(level)

    handler = COMMANDS[args.command]
    try:
        ctx = build_context(args.vault_dir)
        return handler(ctx, args)
    except (CryptVaultError, OSError, ValueError) as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
