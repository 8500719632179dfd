"""
Lykdat visual search client.

Uploads an image as multipart form data to the global search endpoint.
"""

import asyncio
from typing import Optional

import aiohttp
import structlog
from pydantic import ValidationError as PydanticValidationError

from ethical_scan.domain.garment.lykdat_mapper import LykdatMapper
from ethical_scan.domain.garment.models import VisualMatch
from ethical_scan.domain.shared.errors import (
    ConfigurationError,
    ExternalServiceError,
    TimeoutError,
    ValidationError,
)
from ethical_scan.infrastructure.http.base_client import JsonApiClient

logger = structlog.get_logger(__name__)


class LykdatClient(JsonApiClient):
    """Lykdat global search client."""

    SEARCH_URL = "https://cloudapi.lykdat.com/v1/global/search"
    SERVICE_NAME = "Lykdat"

    def __init__(self, api_key: Optional[str], timeout_seconds: float = 10) -> None:
        """Initialize API client.

        Args:
            api_key: Lykdat API key
            timeout_seconds: Request timeout
        """
        super().__init__(timeout_seconds=timeout_seconds)
        self.api_key = api_key

    async def search(
        self,
        image: bytes,
        filename: str = "image.jpg",
        content_type: str = "image/jpeg",
    ) -> list[VisualMatch]:
        """Search products visually similar to an image.

        Args:
            image: Raw image bytes
            filename: Upload filename sent to Lykdat
            content_type: Upload MIME type

        Returns:
            Matches in relevance order; empty when nothing matches or the
            API answers with an error status

        Raises:
            ValidationError: If image is empty
            ConfigurationError: If no API key is configured (nothing is sent)
            TimeoutError: If request times out
            ExternalServiceError: If the request or body parsing fails
        """
        if not image:
            raise ValidationError("No image uploaded")

        if not self.api_key:
            logger.error("LYKDAT_API_KEY not set")
            raise ConfigurationError("LYKDAT_API_KEY not set")

        form = aiohttp.FormData()
        form.add_field("api_key", self.api_key)
        form.add_field("image", image, filename=filename, content_type=content_type)

        try:
            async with self.session.post(
                self.SEARCH_URL, data=form, timeout=self.timeout
            ) as response:
                if response.status >= 400:
                    logger.warning("Lykdat search failed", status=response.status)
                    return []

                data = await self.read_json(response)

        except asyncio.TimeoutError as e:
            msg = "Lykdat API timeout"
            raise TimeoutError(msg) from e

        except aiohttp.ClientError as e:
            msg = f"Lykdat API client error: {e}"
            raise ExternalServiceError(msg) from e

        try:
            matches = LykdatMapper.parse_matches(data)
        except (PydanticValidationError, TypeError, KeyError, AttributeError) as e:
            msg = "Lykdat payload is malformed"
            raise ExternalServiceError(msg) from e

        logger.info("Lykdat search completed", matches=len(matches))
        return matches
