"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ChainMode(str, Enum):
    """How registry and verifier capabilities are backed."""

    MOCK = "mock"
    ONCHAIN = "onchain"


class ChainSettings(BaseSettings):
    """Ledger RPC endpoints and contract addresses."""

    model_config = SettingsConfigDict(env_prefix="CHAIN_")

    mode: ChainMode = ChainMode.MOCK

    mainnet_rpc_url: str = "https://forno.celo.org"
    staging_rpc_url: str = "https://alfajores-forno.celo-testnet.org"

    # Identity registry (commitment merkle root, root timestamps)
    registry_address: str = ""
    registry_address_staging: str = ""

    # VerifyAll hub
    verify_all_address: str = ""
    verify_all_address_staging: str = ""

    def rpc_url_for(self, staging: bool) -> str:
        """Select the RPC URL for mainnet or the staging network."""
        return self.staging_rpc_url if staging else self.mainnet_rpc_url

    def registry_address_for(self, staging: bool) -> str:
        """Select the registry contract address."""
        return self.registry_address_staging if staging else self.registry_address

    def verify_all_address_for(self, staging: bool) -> str:
        """Select the VerifyAll contract address."""
        return self.verify_all_address_staging if staging else self.verify_all_address


class VerifierSettings(BaseSettings):
    """
    Defaults for the verifier exposed by the HTTP service.

    The optional policy fields are applied through the fluent setters, so the
    same validation rules hold for environment-driven configuration.
    """

    model_config = SettingsConfigDict(env_prefix="VERIFIER_")

    scope: str = "attest"
    endpoint: str = "http://localhost:8004/api/v1/verify"
    user_identifier_type: Literal["uuid", "hex"] = "uuid"
    mock_passport: bool = False

    minimum_age: int | None = None
    nationality: str | None = None
    excluded_countries: str = ""
    passport_no_ofac: bool = False
    name_and_dob_ofac: bool = False
    name_and_yob_ofac: bool = False

    @field_validator("nationality")
    @classmethod
    def normalize_nationality(cls, v: str | None) -> str | None:
        """Country codes are compared in upper case, like the exclusion list."""
        if v is None or not v.strip():
            return None
        return v.strip().upper()

    @property
    def excluded_countries_list(self) -> list[str]:
        """Parse the comma-separated exclusion list."""
        return [c.strip().upper() for c in self.excluded_countries.split(",") if c.strip()]


class CORSSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    origins: str = "http://localhost:3000,http://localhost:5173"
    allow_credentials: bool = True

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into list."""
        return [o.strip() for o in self.origins.split(",") if o.strip()]


class ServicePorts(BaseSettings):
    """Service port configuration."""

    verification: int = Field(default=8004, alias="VERIFICATION_PORT")


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: LogLevel = LogLevel.INFO

    ports: ServicePorts = Field(default_factory=ServicePorts)

    # Ledger access
    chain: ChainSettings = Field(default_factory=ChainSettings)

    # Verification defaults
    verifier: VerifierSettings = Field(default_factory=VerifierSettings)

    cors: CORSSettings = Field(default_factory=CORSSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
