"""
Ethical rating search client.

Queries the Google Custom Search JSON API restricted to Ethical
Consumer and returns the first matching page.
"""

import asyncio
from typing import Optional

import aiohttp
import structlog
from pydantic import ValidationError as PydanticValidationError

from ethical_scan.domain.ethics.models import EthicalRating
from ethical_scan.domain.ethics.search_mapper import EthicalSearchMapper
from ethical_scan.domain.shared.errors import (
    ConfigurationError,
    ExternalServiceError,
    TimeoutError,
    ValidationError,
)
from ethical_scan.infrastructure.http.base_client import JsonApiClient

logger = structlog.get_logger(__name__)


class EthicalSearchClient(JsonApiClient):
    """Custom Search client for ethical rating pages."""

    BASE_URL = "https://www.googleapis.com/customsearch/v1"
    SERVICE_NAME = "Ethical search"
    RESULT_COUNT = 3

    def __init__(
        self,
        api_key: Optional[str],
        engine_id: Optional[str],
        timeout_seconds: float = 10,
    ) -> None:
        """Initialize API client.

        Args:
            api_key: Custom Search API key
            engine_id: Programmable search engine id (``cx``)
            timeout_seconds: Request timeout
        """
        super().__init__(timeout_seconds=timeout_seconds)
        self.api_key = api_key
        self.engine_id = engine_id

    async def search_rating(self, brand: str) -> Optional[EthicalRating]:
        """Find an ethical rating page for a brand or manufacturer.

        Args:
            brand: Manufacturer or brand name

        Returns:
            First result with title and link, or None when nothing
            matches or the API answers with an error status

        Raises:
            ValidationError: If brand is blank
            ConfigurationError: If credentials are missing (nothing is sent)
            TimeoutError: If request times out
            ExternalServiceError: If the request or body parsing fails
        """
        if not brand or not brand.strip():
            raise ValidationError("Brand is required")

        if not self.api_key or not self.engine_id:
            logger.error("ETHICAL_SEARCH_API_KEY or ETHICAL_SEARCH_ENGINE_ID not set")
            raise ConfigurationError("Ethical search not configured")

        params = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": EthicalSearchMapper.build_query(brand),
            "num": str(self.RESULT_COUNT),
        }

        try:
            async with self.session.get(
                self.BASE_URL, params=params, timeout=self.timeout
            ) as response:
                if response.status >= 400:
                    logger.warning(
                        "Ethical search failed",
                        brand=brand,
                        status=response.status,
                    )
                    return None

                data = await self.read_json(response)

        except asyncio.TimeoutError as e:
            msg = "Ethical search API timeout"
            raise TimeoutError(msg) from e

        except aiohttp.ClientError as e:
            msg = f"Ethical search API client error: {e}"
            raise ExternalServiceError(msg) from e

        try:
            rating = EthicalSearchMapper.first_rating(data)
        except PydanticValidationError as e:
            msg = "Ethical search payload is malformed"
            raise ExternalServiceError(msg) from e

        logger.info(
            "Ethical search completed",
            brand=brand,
            found=rating is not None,
        )
        return rating
