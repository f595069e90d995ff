from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Solana JSON-RPC endpoint (getTokenSupply / getAccountInfo)
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    rpc_timeout_sec: float = 15.0

    # Off-chain metadata JSON (the URI stored in Metaplex metadata)
    offchain_timeout_sec: float = 10.0

    # Website DNS lookup during enrichment
    dns_timeout_sec: float = 5.0

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # e.g. "logs/token_info_{time:YYYY-MM-DD}.log", empty = console only


settings = Settings()
