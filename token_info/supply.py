"""Fixed-point rendering of SPL token supply.

RPC returns supply as a u64 string of base units plus a decimals count.
The formatted value keeps every significant digit and drops trailing zeros.
"""

from token_info.exceptions import InvalidAmount, SupplyOverflow

U64_MAX = 2**64 - 1

# 10**20 no longer fits in a u64
MAX_DECIMALS = 19


def format_supply(amount: str, decimals: int) -> str:
    """Format a raw u64 amount as a trimmed decimal string.

    format_supply("1500000", 6) -> "1.5"
    format_supply("123", 0) -> "123"

    Raises:
        InvalidAmount: amount is not an unsigned 64-bit integer.
        SupplyOverflow: decimals outside 0..19.
    """
    if not (amount.isascii() and amount.isdigit()):
        raise InvalidAmount(f"Not an unsigned integer: {amount!r}")
    value = int(amount)
    if value > U64_MAX:
        raise InvalidAmount(f"Amount exceeds u64: {amount}")

    if not 0 <= decimals <= MAX_DECIMALS:
        raise SupplyOverflow(f"10^{decimals} does not fit in u64")

    whole, fractional = divmod(value, 10**decimals)
    if decimals == 0:
        return str(whole)

    formatted = f"{whole}.{fractional:0{decimals}d}"
    return formatted.rstrip("0").rstrip(".")
