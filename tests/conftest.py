"""Shared fixtures: an Anchor workspace on disk, a wallet, and RPC payloads."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

import pytest
from solders.keypair import Keypair

FIXTURES = Path(__file__).parent / "fixtures"
PROGRAM_ID = "6rbcJVHa32dKfw8kF1F1quSravjCLxpcjyuEqw7rP2Gc"

ANCHOR_TOML = f"""\
[toolchain]

[features]
seeds = false
skip-lint = false

[programs.localnet]
utils = "{PROGRAM_ID}"

[registry]
url = "https://api.apr.dev"

[provider]
cluster = "Localnet"
wallet = "~/.config/solana/id.json"

[scripts]
client = "yarn run ts-node client/*.ts"
"""


def save_keypair(keypair: Keypair, path: Path) -> Path:
    """Write a keypair in Solana CLI format (a JSON array of 64 bytes)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")
    return path


@pytest.fixture()
def anchor_workspace(tmp_path: Path) -> Path:
    """Create an Anchor project with the utils IDL built into target/idl."""
    root = tmp_path / "workspace"
    idl_dir = root / "target" / "idl"
    idl_dir.mkdir(parents=True)
    (root / "Anchor.toml").write_text(ANCHOR_TOML, encoding="utf-8")
    shutil.copy(FIXTURES / "utils.json", idl_dir / "utils.json")
    return root


@pytest.fixture()
def wallet(tmp_path: Path) -> tuple[Keypair, Path]:
    """Generate a keypair and save it in Solana CLI format."""
    keypair = Keypair()
    path = save_keypair(keypair, tmp_path / "id.json")
    return keypair, path


def balance_response(lamports: int, slot: int = 1) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "result": {"context": {"apiVersion": "1.18.22", "slot": slot}, "value": lamports},
        "id": 1,
    }
