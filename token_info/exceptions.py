class TokenInfoError(Exception):
    pass


class InvalidAmount(TokenInfoError):
    """Raw supply amount is not an unsigned 64-bit integer."""


class SupplyOverflow(TokenInfoError):
    """Decimal scaling would not fit in an unsigned 64-bit integer."""


class LookupFailed(TokenInfoError):
    """RPC transport error, JSON-RPC error, malformed result or missing account."""


class DecodeFailed(TokenInfoError):
    """Account bytes do not match the Metaplex metadata layout."""


class EnrichmentFailed(TokenInfoError):
    """Off-chain metadata could not be fetched or parsed."""
