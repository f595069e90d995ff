"""Fixtures for token_info tests — raw Metaplex metadata account builder."""

import struct
from collections.abc import Callable

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]


def _string(value: str, padded_len: int = 0) -> bytes:
    raw = value.encode("utf-8").ljust(padded_len, b"\x00")
    return struct.pack("<I", len(raw)) + raw


def build_metadata_account(
    *,
    mint: Pubkey | None = None,
    update_authority: Pubkey | None = None,
    name: str = "Test Token",
    symbol: str = "TEST",
    uri: str = "https://example.com/meta.json",
    seller_fee_basis_points: int = 500,
    creators: list[tuple[Pubkey, bool, int]] | None = None,
    primary_sale_happened: bool = False,
    is_mutable: bool = True,
    trailing: bytes | None = None,
    pad_strings: bool = False,
) -> bytes:
    """Serialize a MetadataV1 account.

    `trailing` replaces everything after is_mutable; default is six None
    options (edition_nonce .. programmable_config).
    """
    data = bytearray([4])
    data += bytes(update_authority or Pubkey.new_unique())
    data += bytes(mint or Pubkey.new_unique())
    data += _string(name, 32 if pad_strings else 0)
    data += _string(symbol, 10 if pad_strings else 0)
    data += _string(uri, 200 if pad_strings else 0)
    data += struct.pack("<H", seller_fee_basis_points)

    if creators is None:
        data += b"\x00"
    else:
        data += b"\x01" + struct.pack("<I", len(creators))
        for address, verified, share in creators:
            data += bytes(address) + bytes([int(verified), share])

    data += bytes([int(primary_sale_happened), int(is_mutable)])
    data += trailing if trailing is not None else b"\x00" * 6
    return bytes(data)


@pytest.fixture
def metadata_account() -> Callable[..., bytes]:
    return build_metadata_account
