"""Pydantic models for the Metaplex Token Metadata account."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict


class MetadataKey(IntEnum):
    """Account discriminator (first byte of every Token Metadata account)."""

    UNINITIALIZED = 0
    EDITION_V1 = 1
    MASTER_EDITION_V1 = 2
    RESERVATION_LIST_V1 = 3
    METADATA_V1 = 4
    RESERVATION_LIST_V2 = 5
    MASTER_EDITION_V2 = 6
    EDITION_MARKER = 7
    USE_AUTHORITY_RECORD = 8
    COLLECTION_AUTHORITY_RECORD = 9
    TOKEN_OWNED_ESCROW = 10
    TOKEN_RECORD = 11
    METADATA_DELEGATE = 12
    EDITION_MARKER_V2 = 13
    HOLDER_DELEGATE = 14


class TokenStandard(IntEnum):
    NON_FUNGIBLE = 0
    FUNGIBLE_ASSET = 1
    FUNGIBLE = 2
    NON_FUNGIBLE_EDITION = 3
    PROGRAMMABLE_NON_FUNGIBLE = 4
    PROGRAMMABLE_NON_FUNGIBLE_EDITION = 5


class UseMethod(IntEnum):
    BURN = 0
    MULTIPLE = 1
    SINGLE = 2


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Creator(_Frozen):
    address: str
    verified: bool
    share: int  # percent, shares of all creators sum to 100


class Collection(_Frozen):
    verified: bool
    key: str


class Uses(_Frozen):
    use_method: UseMethod
    remaining: int
    total: int


class CollectionDetails(_Frozen):
    """Sized collection info. V1 carries a size, V2 is padding only."""

    version: str  # "V1" or "V2"
    size: int | None = None


class ProgrammableConfig(_Frozen):
    rule_set: str | None = None


class MetadataRecord(_Frozen):
    """Decoded Metadata account.

    String fields are stored as decoded, NUL padding included.
    Optional fields are None when the account does not carry them.
    """

    key: MetadataKey
    update_authority: str
    mint: str
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: list[Creator] | None = None
    primary_sale_happened: bool = False
    is_mutable: bool = True
    edition_nonce: int | None = None
    token_standard: TokenStandard | None = None
    collection: Collection | None = None
    uses: Uses | None = None
    collection_details: CollectionDetails | None = None
    programmable_config: ProgrammableConfig | None = None
