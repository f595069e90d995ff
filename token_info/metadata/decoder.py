"""Decode Metaplex Token Metadata accounts (Borsh layout).

Layout from https://github.com/metaplex-foundation/mpl-token-metadata

  0       key (u8, MetadataV1 = 4)
  1:33    update_authority (Pubkey)
  33:65   mint (Pubkey)
  65:     name, symbol, uri (u32 LE length + UTF-8, NUL padded)
          seller_fee_basis_points (u16 LE)
          creators Option<Vec<Creator>>
          primary_sale_happened (bool), is_mutable (bool)
          edition_nonce Option<u8>
          token_standard Option<u8 enum>
          collection Option<{verified bool, key Pubkey}>
          uses Option<{use_method u8, remaining u64, total u64}>
          collection_details Option<enum V1{size u64} | V2{[u8; 8]}>
          programmable_config Option<enum V1{rule_set Option<Pubkey>}>

Accounts created before a field existed end early; every field after
is_mutable is read as None once the buffer is exhausted.
"""

import struct
from enum import IntEnum
from typing import Any

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token_info.exceptions import DecodeFailed
from token_info.metadata.models import (
    Collection,
    CollectionDetails,
    Creator,
    MetadataKey,
    MetadataRecord,
    ProgrammableConfig,
    TokenStandard,
    Uses,
    UseMethod,
)

TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")

PUBKEY_SIZE = 32


def find_metadata_address(mint: Pubkey) -> Pubkey:
    """Derive the metadata PDA for a mint."""
    address, _bump = Pubkey.find_program_address(
        [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)],
        TOKEN_METADATA_PROGRAM_ID,
    )
    return address


class _BorshReader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    @property
    def exhausted(self) -> bool:
        return self._offset >= len(self._data)

    def take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise DecodeFailed(
                f"Unexpected end of data at offset {self._offset} (need {size} bytes)"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def read_u8(self) -> int:
        return self.take(1)[0]

    def read_u16(self) -> int:
        return struct.unpack("<H", self.take(2))[0]

    def read_u32(self) -> int:
        return struct.unpack("<I", self.take(4))[0]

    def read_u64(self) -> int:
        return struct.unpack("<Q", self.take(8))[0]

    def read_bool(self) -> bool:
        value = self.read_u8()
        if value > 1:
            raise DecodeFailed(f"Invalid bool byte {value} at offset {self._offset - 1}")
        return value == 1

    def read_pubkey(self) -> str:
        return str(Pubkey.from_bytes(self.take(PUBKEY_SIZE)))

    def read_string(self) -> str:
        raw = self.take(self.read_u32())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeFailed(f"Invalid UTF-8 string: {e}") from e

    def option_tag(self) -> bool:
        tag = self.read_u8()
        if tag > 1:
            raise DecodeFailed(f"Invalid Option tag {tag} at offset {self._offset - 1}")
        return tag == 1

    def trailing_option_tag(self) -> bool:
        """Option tag for a field newer accounts may omit entirely."""
        if self.exhausted:
            return False
        return self.option_tag()


def decode_metadata(data: bytes) -> MetadataRecord:
    """Decode raw Metadata account bytes.

    Raises:
        DecodeFailed: wrong account key, truncated buffer, bad UTF-8 or
            unknown enum variant.
    """
    reader = _BorshReader(data)

    key_byte = reader.read_u8()
    if key_byte != MetadataKey.METADATA_V1:
        raise DecodeFailed(f"Not a metadata account (key={key_byte})")

    update_authority = reader.read_pubkey()
    mint = reader.read_pubkey()
    name = reader.read_string()
    symbol = reader.read_string()
    uri = reader.read_string()
    seller_fee_basis_points = reader.read_u16()

    creators: list[Creator] | None = None
    if reader.option_tag():
        creators = [
            Creator(
                address=reader.read_pubkey(),
                verified=reader.read_bool(),
                share=reader.read_u8(),
            )
            for _ in range(reader.read_u32())
        ]

    primary_sale_happened = reader.read_bool()
    is_mutable = reader.read_bool()

    edition_nonce = reader.read_u8() if reader.trailing_option_tag() else None

    token_standard: TokenStandard | None = None
    if reader.trailing_option_tag():
        token_standard = _enum(TokenStandard, reader.read_u8())

    collection: Collection | None = None
    if reader.trailing_option_tag():
        collection = Collection(verified=reader.read_bool(), key=reader.read_pubkey())

    uses: Uses | None = None
    if reader.trailing_option_tag():
        uses = Uses(
            use_method=_enum(UseMethod, reader.read_u8()),
            remaining=reader.read_u64(),
            total=reader.read_u64(),
        )

    collection_details: CollectionDetails | None = None
    if reader.trailing_option_tag():
        collection_details = _read_collection_details(reader)

    programmable_config: ProgrammableConfig | None = None
    if reader.trailing_option_tag():
        variant = reader.read_u8()
        if variant != 0:
            raise DecodeFailed(f"Unknown ProgrammableConfig variant {variant}")
        rule_set = reader.read_pubkey() if reader.option_tag() else None
        programmable_config = ProgrammableConfig(rule_set=rule_set)

    return MetadataRecord(
        key=MetadataKey.METADATA_V1,
        update_authority=update_authority,
        mint=mint,
        name=name,
        symbol=symbol,
        uri=uri,
        seller_fee_basis_points=seller_fee_basis_points,
        creators=creators,
        primary_sale_happened=primary_sale_happened,
        is_mutable=is_mutable,
        edition_nonce=edition_nonce,
        token_standard=token_standard,
        collection=collection,
        uses=uses,
        collection_details=collection_details,
        programmable_config=programmable_config,
    )


def _read_collection_details(reader: _BorshReader) -> CollectionDetails:
    variant = reader.read_u8()
    if variant == 0:
        return CollectionDetails(version="V1", size=reader.read_u64())
    if variant == 1:
        reader.take(8)  # padding
        return CollectionDetails(version="V2")
    raise DecodeFailed(f"Unknown CollectionDetails variant {variant}")


def _enum(enum_type: type[IntEnum], value: int) -> Any:
    try:
        return enum_type(value)
    except ValueError as e:
        raise DecodeFailed(f"Unknown {enum_type.__name__} variant {value}") from e
