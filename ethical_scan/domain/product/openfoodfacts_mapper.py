"""
OpenFoodFacts data mapper.

Transforms OpenFoodFacts product responses to NutritionInfo.
"""

from typing import Any, Optional

from ethical_scan.domain.product.models import NutritionInfo

# Fields requested from the product endpoint; everything else is discarded.
PRODUCT_FIELDS = ("product_name", "brands", "ingredients_text", "nutriscore_grade")


class OpenFoodFactsMapper:
    """Maps OpenFoodFacts API data to domain models."""

    @staticmethod
    def parse_product_response(response_data: dict[str, Any]) -> Optional[NutritionInfo]:
        """Parse OpenFoodFacts product API response.

        Args:
            response_data: Raw API response JSON

        Returns:
            NutritionInfo, or None if the product is unknown

        Example:
            >>> response = {
            ...     "status": 1,
            ...     "product": {
            ...         "product_name": "Nutella",
            ...         "brands": "Ferrero",
            ...         "nutriscore_grade": "e",
            ...     },
            ... }
            >>> info = OpenFoodFactsMapper.parse_product_response(response)
            >>> assert info.product_name == "Nutella"
            >>> assert info.nutriscore == "e"
        """
        product_data = response_data.get("product")
        if not isinstance(product_data, dict):
            return None

        # status is 1 when found, 0 otherwise; absent on some mirrors
        if response_data.get("status", 1) == 0:
            return None

        return NutritionInfo(
            product_name=_text(product_data.get("product_name")),
            brands=_text(product_data.get("brands")),
            ingredients=_text(product_data.get("ingredients_text")),
            nutriscore=_text(product_data.get("nutriscore_grade")),
        )


def _text(value: Any) -> Optional[str]:
    """Keep non-empty strings, drop everything else."""
    if isinstance(value, str) and value.strip():
        return value
    return None
