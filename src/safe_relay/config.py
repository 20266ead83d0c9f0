"""Application configuration using pydantic-settings.

Cometh Connect credentials, the fixed chain and the read-only RPC endpoint
used for contract bindings all come from the environment.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Avalanche Fuji testnet
FUJI_CHAIN_ID = 43113
FUJI_RPC_URL = "https://api.avax-test.network/ext/bc/C/rpc"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Cometh Connect
    # ======================
    cometh_api_key: str = Field(default="", description="Cometh Connect API key")
    cometh_api_secret: str = Field(
        default="", description="Cometh Connect API secret (sponsorship registration)"
    )
    cometh_rpc_url: str = Field(default=FUJI_RPC_URL, description="RPC URL used by the wallet client")
    cometh_api_base_url: str = Field(
        default="https://api.connect.cometh.io", description="Cometh Connect API base URL"
    )

    # ======================
    # Chain
    # ======================
    chain_id: int = Field(default=FUJI_CHAIN_ID, description="Chain ID for envelopes and sponsorship rows")
    read_rpc_url: str = Field(default=FUJI_RPC_URL, description="Read-only RPC URL for contract bindings")

    # ======================
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/safe_relay.db",
        description="Database connection URL",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    http_timeout: float = Field(default=30.0, description="Timeout for outbound HTTP and RPC calls")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Admin / Safety
    # ======================
    admin_token: str = Field(default="", description="Admin token for sponsorship registration")
    dry_run: bool = Field(default=False, description="Skip the Cometh sponsorship API")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "dry_run": self.dry_run,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "database_url": self._redact_url(self.database_url),
            "chain_id": self.chain_id,
            "read_rpc_url": self.read_rpc_url,
            "cometh": {
                "rpc": self.cometh_rpc_url,
                "api": self.cometh_api_base_url,
                "api_key": "***" if self.cometh_api_key else "(not set)",
                "api_secret": "***" if self.cometh_api_secret else "(not set)",
            },
            "admin_token": "***" if self.admin_token else "(not set)",
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact sensitive parts of database URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
