"""Off-chain metadata enrichment — JSON behind the metadata URI + website DNS.

The URI stored in Metaplex metadata usually points at a JSON document
(name, image, description, website, socials). Its top-level fields are
flattened into string pairs. When a "website" field is present its host
is resolved and the number of A/AAAA records is added under
WEBSITE_DNS_KEY.
"""

import asyncio
import json
import socket

import httpx
from loguru import logger

from token_info.exceptions import EnrichmentFailed

WEBSITE_KEY = "website"
WEBSITE_DNS_KEY = "number of website dns records"


class OffchainEnricher:
    """Fetches and flattens off-chain token metadata."""

    def __init__(self, timeout: float = 10.0, dns_timeout: float = 5.0) -> None:
        self._dns_timeout = dns_timeout
        self._http = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def close(self) -> None:
        await self._http.aclose()

    async def enrich(self, uri: str) -> dict[str, str]:
        """Fetch the JSON behind `uri` and flatten it.

        Returns {} for a missing URI (empty or NUL padding only) or for
        JSON that is not an object.

        Raises:
            EnrichmentFailed: malformed URI, transport error, non-2xx
                status, or a body that is not valid JSON.
        """
        uri = uri.rstrip("\x00").strip()
        if not uri:
            logger.warning("[ENRICH] Metadata has no URI, off-chain info not retrieved")
            return {}

        try:
            resp = await self._http.get(uri)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise EnrichmentFailed(f"GET {uri} failed: {type(e).__name__}: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise EnrichmentFailed(f"GET {uri} returned HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise EnrichmentFailed(f"GET {uri} returned invalid JSON") from e

        info = flatten_json_object(payload)

        website = info.get(WEBSITE_KEY)
        if website is not None:
            host = website_host(website)
            count = await self._count_dns_records(host) if host else None
            if count is not None:
                info[WEBSITE_DNS_KEY] = str(count)

        return info

    async def _count_dns_records(self, host: str) -> int | None:
        """Number of distinct A/AAAA addresses for host, None on failure."""
        try:
            addresses = await asyncio.wait_for(self._resolve(host), timeout=self._dns_timeout)
        except (OSError, TimeoutError, UnicodeError) as e:
            logger.warning(f"[ENRICH] DNS lookup failed for {host}: {e}")
            return None

        return len(addresses)

    async def _resolve(self, host: str) -> set[str]:
        loop = asyncio.get_running_loop()
        infos = await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
        return {sockaddr[0] for *_, sockaddr in infos}


def flatten_json_object(payload: object) -> dict[str, str]:
    """Top-level pairs of a JSON object as strings; {} for any other JSON."""
    if not isinstance(payload, dict):
        return {}
    return {
        str(key): value if isinstance(value, str) else json.dumps(value)
        for key, value in payload.items()
    }


def website_host(website: str) -> str:
    """Extract the host to resolve from a metadata "website" value.

    '"https://example.com/about" ' -> "example.com"
    """
    host = website.strip(' "')
    host = host.removeprefix("https://")
    return host.split("/", 1)[0]
