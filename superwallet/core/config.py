"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///./superwallet.db"
    echo: bool = False
    busy_timeout: float = 15.0
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="superwallet-change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24


class WalletSettings(BaseModel):
    demo_address: str = "0xb8c1f75bb7550bb51039c64e92c78d15ad9dbbe1"
    ledger_asset: str = "XP"
    seed_balance: Decimal = Decimal("1")


class IntegrationSettings(BaseModel):
    price_feed: Literal["static", "coinmarketcap"] = "static"
    coinmarketcap_url: str = "https://pro-api.coinmarketcap.com/v1/cryptocurrency/quotes/latest"
    coinmarketcap_api_key: Optional[str] = None
    static_price_usd: Decimal = Decimal("0.001")
    usd_krw_rate: Decimal = Decimal("1300")

    chain_rpc: Literal["mock", "jsonrpc"] = "mock"
    rpc_endpoints: list[str] = Field(
        default_factory=lambda: [
            "https://rpc.x-phere.com",
            "https://mainnet-rpc.x-phere.com",
            "https://api.x-phere.com/rpc",
        ]
    )
    rpc_timeout: float = 10.0
    chain_id: str = "0x59d"
    network_id: str = "xphere-mainnet"


class IdentitySettings(BaseModel):
    did_method: str = "xphere"
    issuer_did: str = "did:xphere:superwallet"
    did_validity_days: int = Field(default=365 * 5, gt=0)
    credential_validity_days: int = Field(default=365, gt=0)


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Super Wallet"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    wallet: WalletSettings = WalletSettings()
    integrations: IntegrationSettings = IntegrationSettings()
    identity: IdentitySettings = IdentitySettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port


@lru_cache()
def get_settings() -> Settings:
    return Settings()
