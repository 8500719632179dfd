"""
OpenFoodFacts API client.

Handles HTTP requests to the OpenFoodFacts product database.
Public endpoint, no credential.
"""

import asyncio
from typing import Optional

import aiohttp
import structlog
from pydantic import ValidationError as PydanticValidationError

from ethical_scan.domain.product.models import NutritionInfo
from ethical_scan.domain.product.openfoodfacts_mapper import (
    PRODUCT_FIELDS,
    OpenFoodFactsMapper,
)
from ethical_scan.domain.shared.errors import ExternalServiceError, TimeoutError
from ethical_scan.domain.shared.value_objects import Barcode
from ethical_scan.infrastructure.http.base_client import JsonApiClient

logger = structlog.get_logger(__name__)


class OpenFoodFactsClient(JsonApiClient):
    """OpenFoodFacts API client."""

    BASE_URL = "https://world.openfoodfacts.org/api/v2"
    SERVICE_NAME = "OpenFoodFacts"

    async def get_nutrition(self, barcode: Barcode) -> Optional[NutritionInfo]:
        """Get nutrition data by barcode.

        Args:
            barcode: Product barcode

        Returns:
            NutritionInfo, or None if the product is unknown or the
            API answered with an error status

        Raises:
            TimeoutError: If request times out
            ExternalServiceError: If the request or body parsing fails

        Example:
            >>> async def test():
            ...     async with OpenFoodFactsClient() as client:
            ...         barcode = Barcode(value="3017620422003")
            ...         return await client.get_nutrition(barcode)
        """
        url = f"{self.BASE_URL}/product/{barcode.value}"
        params = {"fields": ",".join(PRODUCT_FIELDS)}

        try:
            async with self.session.get(url, params=params, timeout=self.timeout) as response:
                if response.status >= 400:
                    logger.info(
                        "Product not available in OFF",
                        barcode=barcode.value,
                        status=response.status,
                    )
                    return None

                data = await self.read_json(response)

        except asyncio.TimeoutError as e:
            msg = "OpenFoodFacts API timeout"
            raise TimeoutError(msg) from e

        except aiohttp.ClientError as e:
            msg = f"OpenFoodFacts API client error: {e}"
            raise ExternalServiceError(msg) from e

        try:
            info = OpenFoodFactsMapper.parse_product_response(data)
        except PydanticValidationError as e:
            msg = "OpenFoodFacts product payload is malformed"
            raise ExternalServiceError(msg) from e

        if info is None:
            logger.info("Product not found in OFF", barcode=barcode.value)
            return None

        logger.info(
            "Product found in OFF",
            barcode=barcode.value,
            name=info.product_name,
        )
        return info
