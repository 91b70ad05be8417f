"""
Workspace - Resolves program handles from an Anchor project.

Finds the nearest ``Anchor.toml``, loads IDLs from ``target/idl`` and
binds them to a program id and (optionally) a provider. Everything here
is local file access; no network calls are made.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from solders.pubkey import Pubkey

from ..errors import IdlInvalidError, WorkspaceError
from ..provider import Provider
from ..sigil.keypair import parse_pubkey
from ..utils import normalize_program_name, snake_case
from .idl import Idl, IdlError, load_idl

ANCHOR_TOML = "Anchor.toml"
DEFAULT_CLUSTER = "localnet"

_CLUSTER_HOSTS = {
    "api.devnet.solana.com": "devnet",
    "api.testnet.solana.com": "testnet",
    "api.mainnet-beta.solana.com": "mainnet",
    "localhost": "localnet",
    "127.0.0.1": "localnet",
}


def cluster_section(cluster: str) -> str:
    """Map an Anchor.toml ``[provider].cluster`` value to its ``[programs.*]`` key."""
    value = cluster.strip().lower()
    if value in ("mainnet", "mainnet-beta"):
        return "mainnet"
    if value in ("localnet", "devnet", "testnet", "debug"):
        return value
    if "://" in value:
        host = value.split("://", 1)[1].split("/", 1)[0].split(":", 1)[0]
        return _CLUSTER_HOSTS.get(host, DEFAULT_CLUSTER)
    return DEFAULT_CLUSTER


@dataclass(frozen=True)
class Program:
    idl: Idl
    program_id: Pubkey
    provider: Optional[Provider] = None

    @property
    def name(self) -> str:
        return self.idl.name

    def error_for_code(self, code: int) -> Optional[IdlError]:
        return self.idl.error_for_code(code)


@dataclass(frozen=True)
class Workspace:
    root: Path
    config: dict[str, Any]

    @classmethod
    def discover(cls, start: Optional[Path] = None) -> "Workspace":
        """
        Locate the workspace by walking upward to the first ``Anchor.toml``.

        Raises:
            WorkspaceError: If no Anchor.toml exists above ``start``
        """
        current = (start or Path.cwd()).resolve()
        for candidate in [current, *current.parents]:
            manifest = candidate / ANCHOR_TOML
            if manifest.is_file():
                try:
                    with manifest.open("rb") as f:
                        config = tomllib.load(f)
                except tomllib.TOMLDecodeError as exc:
                    raise WorkspaceError(f"Cannot parse {manifest}: {exc}") from exc
                return cls(root=candidate, config=config)
        raise WorkspaceError(
            f"Cannot find {ANCHOR_TOML} in {current} or any parent directory."
        )

    @property
    def idl_dir(self) -> Path:
        return self.root / "target" / "idl"

    @property
    def cluster(self) -> str:
        provider = self.config.get("provider") or {}
        return cluster_section(str(provider.get("cluster", DEFAULT_CLUSTER)))

    def idl_path(self, name: str) -> Path:
        """
        Find the IDL file for a program name.

        Matches the file stem first, then the program name recorded inside
        each IDL, both compared case- and separator-insensitively.

        Raises:
            WorkspaceError: If no IDL matches
        """
        key = normalize_program_name(name)
        if not self.idl_dir.is_dir():
            raise WorkspaceError(f"IDL directory {self.idl_dir} not found. Run 'anchor build' first.")

        candidates = sorted(self.idl_dir.glob("*.json"))
        for path in candidates:
            if normalize_program_name(path.stem) == key:
                return path
        for path in candidates:
            try:
                idl = load_idl(path)
            except IdlInvalidError:
                continue
            if normalize_program_name(idl.name) == key:
                return path
        raise WorkspaceError(f"Program '{name}' not found in workspace {self.root}.")

    def load_idl(self, name: str) -> Idl:
        return load_idl(self.idl_path(name))

    def program_names(self) -> list[str]:
        if not self.idl_dir.is_dir():
            return []
        return [load_idl(path).name for path in sorted(self.idl_dir.glob("*.json"))]

    def program_id(self, idl: Idl) -> Pubkey:
        """
        Resolve a program's on-chain address.

        Order: ``[programs.<cluster>]`` in Anchor.toml, then the IDL's
        ``address``, then legacy ``metadata.address``.

        Raises:
            WorkspaceError: If no address is declared or it is not a valid key
        """
        programs = (self.config.get("programs") or {}).get(self.cluster) or {}
        declared = programs.get(snake_case(idl.name)) or programs.get(idl.name)
        if isinstance(declared, dict):
            declared = declared.get("address")

        address = declared or idl.address
        if not address:
            raise WorkspaceError(
                f"No program id for '{idl.name}': add it under [programs.{self.cluster}] "
                f"in {ANCHOR_TOML} or rebuild the IDL."
            )
        try:
            return parse_pubkey(str(address))
        except ValueError as exc:
            raise WorkspaceError(f"Invalid program id for '{idl.name}': {address}") from exc

    def program(self, name: str, provider: Optional[Provider] = None) -> Program:
        """Resolve a program handle by workspace name (e.g. ``"Utils"``)."""
        idl = self.load_idl(name)
        return Program(idl=idl, program_id=self.program_id(idl), provider=provider)
