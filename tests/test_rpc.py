"""Tests for the JSON-RPC connection and provider bootstrap."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_httpserver import HTTPServer
from solders.keypair import Keypair

from dymescope.errors import ConfigurationError, RpcError
from dymescope.pneuma.rpc import Connection
from dymescope.provider import Provider

from conftest import balance_response


class TestConnection:
    def test_get_balance(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/", method="POST").respond_with_json(balance_response(1_500_000_000))
        pubkey = Keypair().pubkey()

        conn = Connection(httpserver.url_for("/"))
        assert conn.get_balance(pubkey) == 1_500_000_000

        assert len(httpserver.log) == 1
        body = httpserver.log[0][0].get_json()
        assert body["jsonrpc"] == "2.0"
        assert body["method"] == "getBalance"
        assert body["params"] == [str(pubkey), {"commitment": "processed"}]

    def test_commitment_is_sent(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/", method="POST").respond_with_json(balance_response(0))
        conn = Connection(httpserver.url_for("/"), commitment="finalized")
        assert conn.get_balance(str(Keypair().pubkey())) == 0
        assert httpserver.log[0][0].get_json()["params"][1] == {"commitment": "finalized"}

    def test_unknown_commitment(self) -> None:
        with pytest.raises(ValueError, match="Unknown commitment"):
            Connection("http://localhost:8899", commitment="recent")

    def test_rpc_error_object(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/", method="POST").respond_with_json(
            {"jsonrpc": "2.0", "error": {"code": -32602, "message": "Invalid param: WrongSize"}, "id": 1}
        )
        with pytest.raises(RpcError, match="WrongSize") as excinfo:
            Connection(httpserver.url_for("/")).get_balance(Keypair().pubkey())
        assert excinfo.value.code == -32602
        assert excinfo.value.exit_code == 4

    def test_http_error_status(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/", method="POST").respond_with_data("upstream down", status=503)
        with pytest.raises(RpcError, match="HTTP 503"):
            Connection(httpserver.url_for("/")).get_balance(Keypair().pubkey())

    def test_non_json_body(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/", method="POST").respond_with_data("<html>", status=200)
        with pytest.raises(RpcError, match="not JSON"):
            Connection(httpserver.url_for("/")).get_balance(Keypair().pubkey())

    def test_malformed_result(self, httpserver: HTTPServer) -> None:
        httpserver.expect_request("/", method="POST").respond_with_json(
            {"jsonrpc": "2.0", "result": {"value": -5}, "id": 1}
        )
        with pytest.raises(RpcError, match="invalid value"):
            Connection(httpserver.url_for("/")).get_balance(Keypair().pubkey())

    def test_connection_refused(self) -> None:
        with pytest.raises(RpcError, match="getBalance failed"):
            Connection("http://127.0.0.1:1", timeout=2).get_balance(Keypair().pubkey())


class TestProviderEnv:
    def test_from_environ(self, wallet: tuple[Keypair, Path]) -> None:
        keypair, path = wallet
        provider = Provider.env(
            {"ANCHOR_PROVIDER_URL": "http://127.0.0.1:8899", "ANCHOR_WALLET": str(path)}
        )
        assert provider.public_key == keypair.pubkey()
        assert provider.connection.endpoint == "http://127.0.0.1:8899"
        assert provider.connection.commitment == "processed"

    def test_missing_url(self, wallet: tuple[Keypair, Path]) -> None:
        with pytest.raises(ConfigurationError, match="ANCHOR_PROVIDER_URL"):
            Provider.env({"ANCHOR_WALLET": str(wallet[1])})

    def test_missing_wallet(self) -> None:
        with pytest.raises(ConfigurationError, match="ANCHOR_WALLET"):
            Provider.env({"ANCHOR_PROVIDER_URL": "http://127.0.0.1:8899"})

    def test_bad_commitment(self, wallet: tuple[Keypair, Path]) -> None:
        with pytest.raises(ConfigurationError, match="Unknown commitment"):
            Provider.env(
                {"ANCHOR_PROVIDER_URL": "http://127.0.0.1:8899", "ANCHOR_WALLET": str(wallet[1])},
                commitment="max",
            )

    def test_env_file(
        self, tmp_path: Path, wallet: tuple[Keypair, Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ANCHOR_PROVIDER_URL", "unset")
        monkeypatch.delenv("ANCHOR_PROVIDER_URL")
        monkeypatch.setenv("ANCHOR_WALLET", str(wallet[1]))
        env_file = tmp_path / ".env"
        env_file.write_text("ANCHOR_PROVIDER_URL=http://127.0.0.1:8899\n", encoding="utf-8")

        provider = Provider.env(env_file=env_file)
        assert provider.connection.endpoint == "http://127.0.0.1:8899"

    def test_env_file_does_not_override(
        self, tmp_path: Path, wallet: tuple[Keypair, Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ANCHOR_PROVIDER_URL", "http://from-process:8899")
        monkeypatch.setenv("ANCHOR_WALLET", str(wallet[1]))
        env_file = tmp_path / ".env"
        env_file.write_text("ANCHOR_PROVIDER_URL=http://from-file:8899\n", encoding="utf-8")

        provider = Provider.env(env_file=env_file)
        assert provider.connection.endpoint == "http://from-process:8899"


class TestRpcErrorMessages:
    @pytest.mark.parametrize("error", [None, {}, {"code": -32000}])
    def test_empty_error_member(self, httpserver: HTTPServer, error: object) -> None:
        httpserver.expect_request("/", method="POST").respond_with_json(
            {"jsonrpc": "2.0", "error": error, "id": 1}
        )
        with pytest.raises(RpcError) as excinfo:
            Connection(httpserver.url_for("/")).get_balance(Keypair().pubkey())
        assert str(excinfo.value) == "RPC error: unknown error"
