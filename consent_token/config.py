"""
Configuration management for the Consent Token package
Logging and parsing limits, overridable through CWT_* environment variables
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class TokenSettings(BaseSettings):
    """Token parsing and logging configuration settings"""

    # Parsing limits
    max_payload_bytes: int = Field(
        default=65536,
        description="Largest JSON or base64 payload accepted by the parsers"
    )

    # Serialization
    json_ensure_ascii: bool = Field(
        default=False,
        description="Escape non-ASCII characters when writing JSON"
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True, description="Render logs as JSON lines")

    model_config = {"env_prefix": "CWT_", "case_sensitive": False}


# Global configuration instance
token_settings = TokenSettings()


def get_token_settings() -> TokenSettings:
    """Get the global token settings instance"""
    return token_settings


def update_token_settings(**kwargs) -> TokenSettings:
    """Update token settings with new values"""
    global token_settings
    for key, value in kwargs.items():
        if hasattr(token_settings, key):
            setattr(token_settings, key, value)
    return token_settings
