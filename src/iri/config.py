"""
Configuration management for the IRI toolkit.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IRISettings(BaseSettings):
    """Settings that control how IRI strings are normalized before parsing."""

    nfkc_normalize: bool = Field(
        default=True,
        description=(
            "Apply Unicode Normalization Form KC to constructor, resolve and "
            "replace inputs before parsing"
        ),
    )
    idna_validate: bool = Field(
        default=False,
        description=(
            "Validate registered names against IDNA2008 when transcoding to "
            "Punycode. When disabled, non-ASCII labels are Punycode-encoded "
            "without validation."
        ),
    )

    # Global settings
    log_level: str = Field(
        default="INFO",
        description=(
            "Logging level for scripts that call logging.basicConfig; the "
            "library itself never configures handlers"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="IRI_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


# Global config instance
_config: Optional[IRISettings] = None


def get_config() -> IRISettings:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = IRISettings()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
