"""
BarcodeLookup API client.

Resolves a barcode to its manufacturer through the credentialed
``/v3/products`` endpoint.
"""

import asyncio
from typing import Optional

import aiohttp
import structlog

from ethical_scan.domain.product.barcodelookup_mapper import BarcodeLookupMapper
from ethical_scan.domain.shared.errors import (
    ConfigurationError,
    ExternalServiceError,
    TimeoutError,
)
from ethical_scan.domain.shared.value_objects import Barcode
from ethical_scan.infrastructure.http.base_client import JsonApiClient

logger = structlog.get_logger(__name__)


class BarcodeLookupClient(JsonApiClient):
    """BarcodeLookup API client."""

    BASE_URL = "https://api.barcodelookup.com/v3/products"
    SERVICE_NAME = "BarcodeLookup"

    def __init__(self, api_key: Optional[str], timeout_seconds: float = 10) -> None:
        """Initialize API client.

        Args:
            api_key: BarcodeLookup API key (checked on every call)
            timeout_seconds: Request timeout
        """
        super().__init__(timeout_seconds=timeout_seconds)
        self.api_key = api_key

    async def get_manufacturer(self, barcode: Barcode) -> Optional[str]:
        """Get manufacturer name by barcode.

        Args:
            barcode: Product barcode

        Returns:
            Manufacturer name, or None if the directory has no product
            or no manufacturer for it

        Raises:
            ConfigurationError: If no API key is configured (nothing is sent)
            TimeoutError: If request times out
            ExternalServiceError: If the API answers with an error status
        """
        if not self.api_key:
            logger.error("BARCODE_LOOKUP_API_KEY not set")
            raise ConfigurationError("API key not configured")

        params = {"barcode": barcode.value, "formatted": "y", "key": self.api_key}

        try:
            async with self.session.get(
                self.BASE_URL, params=params, timeout=self.timeout
            ) as response:
                if response.status == 404:
                    logger.info("Barcode not found in BarcodeLookup", barcode=barcode.value)
                    return None

                if response.status >= 400:
                    msg = f"BarcodeLookup API error: {response.status}"
                    raise ExternalServiceError(msg)

                data = await self.read_json(response)

        except asyncio.TimeoutError as e:
            msg = "BarcodeLookup API timeout"
            raise TimeoutError(msg) from e

        except aiohttp.ClientError as e:
            msg = f"BarcodeLookup API client error: {e}"
            raise ExternalServiceError(msg) from e

        manufacturer = BarcodeLookupMapper.extract_manufacturer(data)
        logger.info(
            "Manufacturer lookup completed",
            barcode=barcode.value,
            manufacturer=manufacturer,
        )
        return manufacturer
