"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from attest.config import settings

    print(settings.environment)
    print(settings.chain.rpc_url_for(staging=True))
"""

from attest.config.settings import (
    ChainMode,
    ChainSettings,
    Environment,
    LogLevel,
    Settings,
    VerifierSettings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
    "ChainMode",
    "ChainSettings",
    "VerifierSettings",
]
