"""Tests for Solana keypair loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from solders.keypair import Keypair

from dymescope.errors import ConfigurationError
from dymescope.sigil.keypair import (
    get_address,
    load_keypair,
    parse_pubkey,
    wallet_path_from_env,
)

from conftest import save_keypair


class TestLoadKeypair:
    def test_round_trips_solana_cli_format(self, wallet: tuple[Keypair, Path]) -> None:
        keypair, path = wallet
        loaded = load_keypair(path)
        assert loaded.pubkey() == keypair.pubkey()
        assert get_address(loaded) == str(keypair.pubkey())

    def test_expands_user(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        keypair = Keypair()
        save_keypair(keypair, tmp_path / ".config" / "solana" / "id.json")
        assert load_keypair("~/.config/solana/id.json").pubkey() == keypair.pubkey()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read keypair file"):
            load_keypair(tmp_path / "nope.json")

    def test_not_json(self, tmp_path: Path) -> None:
        path = tmp_path / "id.json"
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_keypair(path)

    @pytest.mark.parametrize("payload", [[1, 2, 3], {"secret": []}, [256] * 64, ["a"] * 64])
    def test_wrong_shape(self, tmp_path: Path, payload: object) -> None:
        path = tmp_path / "id.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(ConfigurationError, match="64 bytes"):
            load_keypair(path)


class TestWalletPathFromEnv:
    def test_reads_anchor_wallet(self, tmp_path: Path) -> None:
        path = tmp_path / "id.json"
        assert wallet_path_from_env({"ANCHOR_WALLET": str(path)}) == path

    def test_missing(self) -> None:
        with pytest.raises(ConfigurationError, match="ANCHOR_WALLET"):
            wallet_path_from_env({})

    def test_empty(self) -> None:
        with pytest.raises(ConfigurationError, match="ANCHOR_WALLET"):
            wallet_path_from_env({"ANCHOR_WALLET": ""})


class TestParsePubkey:
    def test_valid(self) -> None:
        key = parse_pubkey("6rbcJVHa32dKfw8kF1F1quSravjCLxpcjyuEqw7rP2Gc")
        assert str(key) == "6rbcJVHa32dKfw8kF1F1quSravjCLxpcjyuEqw7rP2Gc"

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_pubkey("0xdeadbeef")
