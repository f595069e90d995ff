"""Pydantic models for Solana JSON-RPC results."""

from pydantic import BaseModel, ConfigDict


class SupplyReading(BaseModel):
    """getTokenSupply result: raw u64 amount (string) and decimals."""

    model_config = ConfigDict(frozen=True)

    amount: str
    decimals: int


class AccountInfo(BaseModel):
    """getAccountInfo result with base64 data already decoded."""

    model_config = ConfigDict(frozen=True)

    owner: str
    data: bytes = b""
