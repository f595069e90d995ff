from config.settings import settings
from token_info.rpc.client import SolanaRpcClient

_rpc_client: SolanaRpcClient | None = None


def get_rpc_client() -> SolanaRpcClient:
    """Return the process-wide RPC client, creating it on first use."""
    global _rpc_client
    if _rpc_client is None:
        _rpc_client = SolanaRpcClient(
            settings.solana_rpc_url,
            timeout=settings.rpc_timeout_sec,
        )
    return _rpc_client


async def close_rpc_client() -> None:
    global _rpc_client
    if _rpc_client:
        await _rpc_client.close()
        _rpc_client = None
