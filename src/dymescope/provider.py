"""
Provider - connection plus signing wallet.

Mirrors Anchor's ``AnchorProvider.env()``: the cluster comes from
``ANCHOR_PROVIDER_URL`` and the wallet from the keypair file named by
``ANCHOR_WALLET``. The provider is an explicit object handed to whoever
needs it; there is no process-wide default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .errors import ConfigurationError
from .pneuma.rpc import DEFAULT_COMMITMENT, Connection
from .sigil.keypair import load_keypair, wallet_path_from_env

PROVIDER_URL_ENV = "ANCHOR_PROVIDER_URL"


@dataclass(frozen=True)
class Wallet:
    keypair: Keypair

    @property
    def public_key(self) -> Pubkey:
        return self.keypair.pubkey()

    @classmethod
    def from_path(cls, path: Path | str) -> "Wallet":
        return cls(load_keypair(path))


@dataclass(frozen=True)
class Provider:
    connection: Connection
    wallet: Wallet

    @property
    def public_key(self) -> Pubkey:
        return self.wallet.public_key

    @classmethod
    def env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[Path] = None,
        commitment: str = DEFAULT_COMMITMENT,
    ) -> "Provider":
        """
        Build a provider from the process environment.

        Args:
            environ: Mapping to read instead of ``os.environ``
            env_file: Optional ``.env`` file loaded first; existing variables win
            commitment: Read commitment for the connection

        Raises:
            ConfigurationError: If a variable is missing or the wallet is unreadable
        """
        if env_file is not None and env_file.is_file():
            load_dotenv(env_file, override=False)

        env = os.environ if environ is None else environ

        url = env.get(PROVIDER_URL_ENV)
        if not url:
            raise ConfigurationError(f"Expected environment variable `{PROVIDER_URL_ENV}` is not set.")

        wallet = Wallet.from_path(wallet_path_from_env(env))

        try:
            connection = Connection(url, commitment=commitment)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

        return cls(connection=connection, wallet=wallet)
