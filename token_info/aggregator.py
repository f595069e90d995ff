"""Token info aggregation — account state + metadata + off-chain enrichment.

aggregate() runs the account-state and metadata lookups concurrently:
- account state (owner program, total supply) is required; its failure
  fails the whole aggregation
- metadata is best-effort; a lookup or decode failure yields a report
  without the metadata section
- off-chain enrichment runs only after metadata decoded, and never fails
  the aggregation
"""

import asyncio
from dataclasses import dataclass, field

from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from token_info.enrichment import OffchainEnricher
from token_info.exceptions import DecodeFailed, EnrichmentFailed, LookupFailed
from token_info.metadata.decoder import decode_metadata, find_metadata_address
from token_info.metadata.models import MetadataRecord
from token_info.rpc.client import SolanaRpcClient
from token_info.supply import format_supply


@dataclass(frozen=True)
class AccountRecord:
    """Information collected from the mint account itself."""

    owner_program: str
    total_supply: str

    def render(self) -> str:
        return "\n".join([
            "information collected from account:",
            f"owner: {self.owner_program}",
            f"total supply: {self.total_supply.lower()}",
        ])


@dataclass(frozen=True)
class TokenReport:
    """Aggregated token information for one mint."""

    address: str
    account: AccountRecord
    metadata: MetadataRecord | None = None
    enrichment: dict[str, str] = field(default_factory=dict)

    @property
    def is_partial(self) -> bool:
        return self.metadata is None

    def render(self) -> str:
        sections = [self.account.render()]
        if self.metadata is not None:
            sections.append(render_metadata(self.metadata))
        if self.enrichment:
            sections.append("\n".join(
                f"{key.lower()}: {value.lower()}"
                for key, value in sorted(self.enrichment.items())
            ))
        return "\n\n".join(sections)


class TokenInfoAggregator:
    """Builds a TokenReport for a mint from RPC and off-chain sources."""

    def __init__(self, rpc: SolanaRpcClient, enricher: OffchainEnricher) -> None:
        self._rpc = rpc
        self._enricher = enricher

    async def aggregate(self, address: Pubkey) -> TokenReport:
        """Collect account state, metadata and off-chain info for a mint.

        Raises:
            LookupFailed: account-state RPC lookup failed.
            InvalidAmount: supply amount is not a u64.
            SupplyOverflow: supply decimals out of range.
        """
        account_result, metadata_result = await asyncio.gather(
            self._fetch_account(address),
            self._fetch_metadata(address),
            return_exceptions=True,
        )

        if isinstance(account_result, BaseException):
            raise account_result
        if isinstance(metadata_result, BaseException):
            # Unexpected error outside the metadata failure policy
            raise metadata_result

        enrichment: dict[str, str] = {}
        if metadata_result is not None:
            enrichment = await self._enrich(address, metadata_result.uri)

        return TokenReport(
            address=str(address),
            account=account_result,
            metadata=metadata_result,
            enrichment=enrichment,
        )

    async def _fetch_account(self, address: Pubkey) -> AccountRecord:
        account_info, supply = await asyncio.gather(
            self._rpc.get_account_info(address),
            self._rpc.get_token_supply(address),
        )
        return AccountRecord(
            owner_program=account_info.owner,
            total_supply=format_supply(supply.amount, supply.decimals),
        )

    async def _fetch_metadata(self, address: Pubkey) -> MetadataRecord | None:
        metadata_address = find_metadata_address(address)
        try:
            account_info = await self._rpc.get_account_info(metadata_address)
            return decode_metadata(account_info.data)
        except (LookupFailed, DecodeFailed) as e:
            logger.warning(f"[METADATA] Unavailable for {str(address)[:12]}: {e}")
            return None

    async def _enrich(self, address: Pubkey, uri: str) -> dict[str, str]:
        try:
            return await self._enricher.enrich(uri)
        except EnrichmentFailed as e:
            logger.error(f"[ENRICH] {str(address)[:12]}: {e}")
            return {}


def render_metadata(metadata: MetadataRecord) -> str:
    """Metadata section; optional fields appear only when present."""
    lines = [
        "information collected from metadata:",
        f"key: {metadata.key.name}",
        f"update authority: {metadata.update_authority}",
        f"mint: {metadata.mint}",
        f"name: {_clean(metadata.name)}",
        f"symbol: {_clean(metadata.symbol)}",
        f"uri: {_clean(metadata.uri)}",
        f"seller fee basis points: {metadata.seller_fee_basis_points}",
    ]

    if metadata.creators is not None:
        creators = ", ".join(
            f"{c.address} (verified: {str(c.verified).lower()}, share: {c.share}%)"
            for c in metadata.creators
        )
        lines.append(f"creators: [{creators}]")

    lines.append(f"primary sale happened: {str(metadata.primary_sale_happened).lower()}")
    lines.append(f"is mutable: {str(metadata.is_mutable).lower()}")

    if metadata.edition_nonce is not None:
        lines.append(f"edition nonce: {metadata.edition_nonce}")
    if metadata.token_standard is not None:
        lines.append(f"token standard: {metadata.token_standard.name}")
    if metadata.collection is not None:
        c = metadata.collection
        lines.append(f"collection: {c.key} (verified: {str(c.verified).lower()})")
    if metadata.uses is not None:
        u = metadata.uses
        lines.append(f"uses: {u.use_method.name} ({u.remaining}/{u.total} remaining)")
    if metadata.collection_details is not None:
        cd = metadata.collection_details
        size = f" (size: {cd.size})" if cd.size is not None else ""
        lines.append(f"collection details: {cd.version}{size}")
    if metadata.programmable_config is not None:
        rule_set = metadata.programmable_config.rule_set or "none"
        lines.append(f"programmable config: rule set {rule_set}")

    return "\n".join(lines)


def _clean(value: str) -> str:
    """Strip the NUL padding Metaplex adds to fixed-width strings."""
    return value.rstrip("\x00")
