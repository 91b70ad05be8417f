"""
Solana keypair loading for dymescope.

Wallets are Solana CLI keypair files: a JSON array holding the 64-byte
secret key (32-byte seed followed by the 32-byte public key). The file
path comes from ``ANCHOR_WALLET``, the same variable ``anchor test`` and
``anchor run`` export.

Dependencies: solders (key types only, no full solana-py client)
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..errors import ConfigurationError

WALLET_ENV = "ANCHOR_WALLET"
KEYPAIR_LENGTH = 64


def load_keypair(path: Path | str) -> Keypair:
    """
    Load a keypair from a Solana CLI JSON keypair file.

    Args:
        path: Path to the keypair file (``~`` is expanded)

    Returns:
        solders Keypair

    Raises:
        ConfigurationError: If the file is missing or not a valid keypair
    """
    keypair_path = Path(path).expanduser()
    try:
        raw = keypair_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read keypair file {keypair_path}: {exc}") from exc

    try:
        secret = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Keypair file {keypair_path} is not valid JSON") from exc

    if (
        not isinstance(secret, list)
        or len(secret) != KEYPAIR_LENGTH
        or not all(isinstance(b, int) and 0 <= b <= 255 for b in secret)
    ):
        raise ConfigurationError(
            f"Keypair file {keypair_path} must hold a JSON array of {KEYPAIR_LENGTH} bytes"
        )

    try:
        return Keypair.from_bytes(bytes(secret))
    except Exception as exc:
        raise ConfigurationError(f"Invalid keypair in {keypair_path}: {exc}") from exc


def wallet_path_from_env(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Resolve the wallet keypair path from ``ANCHOR_WALLET``.

    Raises:
        ConfigurationError: If the variable is unset or empty
    """
    env = os.environ if environ is None else environ
    value = env.get(WALLET_ENV)
    if not value:
        raise ConfigurationError(f"Expected environment variable `{WALLET_ENV}` is not set.")
    return Path(value).expanduser()


def get_address(keypair: Keypair) -> str:
    """Base58 address of a keypair's public key."""
    return str(keypair.pubkey())


def parse_pubkey(value: str) -> Pubkey:
    """
    Parse a base58 public key.

    Raises:
        ValueError: If the string is not a valid 32-byte base58 key
    """
    try:
        return Pubkey.from_string(value)
    except Exception as exc:
        raise ValueError(f"Invalid public key {value!r}") from exc
