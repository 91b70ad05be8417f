"""
JSON-RPC connection to a Solana cluster.

Lightweight alternative to solana-py's client: httpx for HTTP and a plain
JSON-RPC 2.0 envelope. Only the read calls dymescope needs are exposed.
"""

from __future__ import annotations

from typing import Any

import httpx
from solders.pubkey import Pubkey

from ..errors import RpcError

DEFAULT_COMMITMENT = "processed"
COMMITMENTS = ("processed", "confirmed", "finalized")
DEFAULT_TIMEOUT = 30.0


class Connection:
    """
    A cluster endpoint plus the commitment used for reads.

    Each call opens its own ``httpx.Client``; nothing is pooled or retried.
    """

    def __init__(
        self,
        endpoint: str,
        commitment: str = DEFAULT_COMMITMENT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if commitment not in COMMITMENTS:
            raise ValueError(f"Unknown commitment {commitment!r}; expected one of {', '.join(COMMITMENTS)}")
        self.endpoint = endpoint
        self.commitment = commitment
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"Connection({self.endpoint!r}, commitment={self.commitment!r})"

    def _rpc_call(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "getBalance")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            RpcError: On transport failure, HTTP error status or an RPC error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": 1,
        }

        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(self.endpoint, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise RpcError(
                f"{method} failed: HTTP {exc.response.status_code} from {self.endpoint}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RpcError(f"{method} failed: {exc}") from exc
        except ValueError as exc:
            raise RpcError(f"{method} failed: response is not JSON") from exc

        if not isinstance(data, dict):
            raise RpcError(f"{method} failed: unexpected response {data!r}")

        if "error" in data:
            error = data["error"]
            if isinstance(error, dict):
                message = error.get("message") or "unknown error"
                code = error.get("code")
            else:
                message = error or "unknown error"
                code = None
            raise RpcError(f"RPC error: {message}", code=code)

        return data.get("result")

    def get_balance(self, pubkey: Pubkey | str) -> int:
        """
        Get the lamport balance of an account.

        Args:
            pubkey: Account public key

        Returns:
            Balance in lamports
        """
        result = self._rpc_call(
            "getBalance", [str(pubkey), {"commitment": self.commitment}]
        )
        value = result.get("value") if isinstance(result, dict) else None
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise RpcError(f"getBalance returned an invalid value: {result!r}")
        return value
