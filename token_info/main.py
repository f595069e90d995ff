"""Entry point — print token information for one or more mint addresses.

Usage:
    token-info <MINT> [<MINT> ...]
    python -m token_info.main <MINT> [<MINT> ...]
"""

import argparse
import asyncio
import sys
import time

from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from config.settings import settings
from token_info.aggregator import TokenInfoAggregator
from token_info.enrichment import OffchainEnricher
from token_info.exceptions import TokenInfoError
from token_info.rpc.shared import close_rpc_client, get_rpc_client
from token_info.utils.logger import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simple CLI that returns token information")
    parser.add_argument("pubkeys", nargs="+", metavar="PUBKEY", help="token mint address")
    return parser.parse_args(argv)


async def report_token(
    aggregator: TokenInfoAggregator, raw_address: str, started: float
) -> bool:
    """Aggregate and print one token. Returns False on failure, never raises."""
    try:
        address = Pubkey.from_string(raw_address)
    except ValueError as e:
        logger.error(f"[TOKEN] Invalid address {raw_address!r}: {e}")
        return False

    try:
        report = await aggregator.aggregate(address)
    except TokenInfoError as e:
        logger.error(f"[TOKEN] {raw_address}: {type(e).__name__}: {e}")
        return False

    if report.is_partial:
        logger.warning(f"[TOKEN] Partial information for {raw_address}: metadata unavailable")
    else:
        logger.info(f"[TOKEN] Information collected for: {raw_address}")
    elapsed = time.monotonic() - started
    print(f"Token Info: {report.render()}\n\nTime taken: {elapsed:.3f}s\n", flush=True)
    return True


async def run(pubkeys: list[str]) -> int:
    """Report every address concurrently. Returns the number of failures."""
    started = time.monotonic()
    enricher = OffchainEnricher(
        timeout=settings.offchain_timeout_sec,
        dns_timeout=settings.dns_timeout_sec,
    )
    aggregator = TokenInfoAggregator(get_rpc_client(), enricher)

    try:
        results = await asyncio.gather(
            *(report_token(aggregator, pubkey, started) for pubkey in pubkeys),
            return_exceptions=True,
        )
    finally:
        await enricher.close()
        await close_rpc_client()

    for pubkey, result in zip(pubkeys, results):
        if isinstance(result, BaseException):
            logger.opt(exception=result).error(f"[TOKEN] Unexpected error for {pubkey}")

    logger.info(f"Total elapsed time {time.monotonic() - started:.3f}s")
    return sum(1 for result in results if result is not True)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logger(level=settings.log_level, log_file=settings.log_file)
    failures = asyncio.run(run(args.pubkeys))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
