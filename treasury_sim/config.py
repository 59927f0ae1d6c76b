"""
Configuration Management Module

Centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class TreasuryConfig(BaseSettings):
    """Treasury simulator configuration"""

    model_config = SettingsConfigDict(
        env_prefix="TREASURY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    api_title: str = "Treasury Movement Simulator"

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Simulation configuration
    seed_on_startup: bool = True  # Load the demo accounts and FX table
    enable_event_logging: bool = True  # Log every domain event at DEBUG


# Global configuration instance
config = TreasuryConfig()


def get_config() -> TreasuryConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> TreasuryConfig:
    """Reload configuration from environment"""
    global config
    config = TreasuryConfig()
    return config
