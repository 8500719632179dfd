"""Process-wide configuration.

Built once at startup and passed to the adapters. Credentials are
optional here: a missing key only fails the relay that needs it.

Example .env:
    BARCODE_LOOKUP_API_KEY=...
    LYKDAT_API_KEY=...
    ETHICAL_SEARCH_API_KEY=...
    ETHICAL_SEARCH_ENGINE_ID=...
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


def _env(name: str) -> Optional[str]:
    """Environment value with blank strings treated as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def mask_secret(value: Optional[str]) -> Optional[str]:
    """Mask a secret for logging: first and last 4 chars only.

    Example:
        >>> mask_secret("abcd1234efgh")
        'abcd...efgh'
        >>> mask_secret("short")
        '***'
    """
    if not value:
        return None
    if len(value) > 8:
        return value[:4] + "..." + value[-4:]
    return "***"


class ScannerSettings(BaseModel):
    """Read-only service settings."""

    model_config = ConfigDict(frozen=True)

    barcode_lookup_api_key: Optional[str] = Field(None, description="BarcodeLookup API key")
    lykdat_api_key: Optional[str] = Field(None, description="Lykdat API key")
    ethical_search_api_key: Optional[str] = Field(None, description="Custom Search API key")
    ethical_search_engine_id: Optional[str] = Field(None, description="Custom Search engine id")
    http_timeout_seconds: float = Field(10.0, gt=0, description="Per-request timeout")
    log_level: str = Field("INFO", description="Logging level name")
    app_version: str = Field("0.0.0-dev", description="Reported by /version")

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> ScannerSettings:
        """Load settings from the environment (and ``.env`` if present).

        Existing environment variables take precedence over the file.
        """
        if env_file is None:
            env_file = Path.cwd() / ".env"
        if env_file.exists():
            load_dotenv(env_file)

        return cls(
            barcode_lookup_api_key=_env("BARCODE_LOOKUP_API_KEY"),
            lykdat_api_key=_env("LYKDAT_API_KEY"),
            ethical_search_api_key=_env("ETHICAL_SEARCH_API_KEY"),
            ethical_search_engine_id=_env("ETHICAL_SEARCH_ENGINE_ID"),
            http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            app_version=os.getenv("APP_VERSION", "0.0.0-dev"),
        )

    def masked(self) -> dict[str, Optional[str]]:
        """Credential snapshot safe to log."""
        return {
            "barcode_lookup_api_key": mask_secret(self.barcode_lookup_api_key),
            "lykdat_api_key": mask_secret(self.lykdat_api_key),
            "ethical_search_api_key": mask_secret(self.ethical_search_api_key),
            "ethical_search_engine_id": mask_secret(self.ethical_search_engine_id),
        }
