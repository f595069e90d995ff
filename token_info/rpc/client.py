"""Solana JSON-RPC client — token supply and raw account data."""

import base64
import binascii
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token_info.exceptions import LookupFailed
from token_info.rpc.models import AccountInfo, SupplyReading


class SolanaRpcClient:
    """Async JSON-RPC client over a single pooled httpx.AsyncClient.

    Safe to share between concurrent lookups. No retries: a failed call
    raises LookupFailed and the caller decides whether it is fatal.
    """

    def __init__(self, rpc_url: str, timeout: float = 15.0) -> None:
        self._rpc_url = rpc_url
        self._http = httpx.AsyncClient(timeout=timeout)
        self._request_id = 0

    async def close(self) -> None:
        await self._http.aclose()

    async def get_token_supply(self, address: Pubkey) -> SupplyReading:
        """Fetch total supply of a mint as raw amount + decimals."""
        result = await self._call("getTokenSupply", [str(address)])
        value = result.get("value") if isinstance(result, dict) else None
        if not value:
            raise LookupFailed(f"getTokenSupply returned no value for {address}")

        try:
            return SupplyReading(amount=value["amount"], decimals=value["decimals"])
        except (KeyError, TypeError, ValidationError) as e:
            raise LookupFailed(f"Malformed getTokenSupply result for {address}: {e}") from e

    async def get_account_info(self, address: Pubkey) -> AccountInfo:
        """Fetch account owner and raw data (base64 encoding)."""
        result = await self._call(
            "getAccountInfo",
            [str(address), {"encoding": "base64"}],
        )
        value = result.get("value") if isinstance(result, dict) else None
        if value is None:
            raise LookupFailed(f"Account not found: {address}")

        try:
            raw_data = value.get("data") or ["", "base64"]
            return AccountInfo(
                owner=value["owner"],
                data=base64.b64decode(raw_data[0]),
            )
        except (KeyError, TypeError, IndexError, binascii.Error, ValidationError) as e:
            raise LookupFailed(f"Malformed getAccountInfo result for {address}: {e}") from e

    async def _call(self, method: str, params: list[Any]) -> Any:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        try:
            resp = await self._http.post(self._rpc_url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"[RPC] {method} transport error: {e}")
            raise LookupFailed(f"{method} failed: {type(e).__name__}: {e}") from e

        if resp.status_code != 200:
            raise LookupFailed(f"{method} HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise LookupFailed(f"{method} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise LookupFailed(f"{method} returned unexpected payload")
        if "error" in data:
            raise LookupFailed(f"{method} RPC error: {data['error']}")

        return data.get("result")
