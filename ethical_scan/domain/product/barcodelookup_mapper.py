"""
BarcodeLookup data mapper.

Extracts the manufacturer of the first product in a
``/v3/products`` response.
"""

from typing import Any, Optional


class BarcodeLookupMapper:
    """Maps BarcodeLookup API data to a manufacturer name."""

    @staticmethod
    def extract_manufacturer(response_data: dict[str, Any]) -> Optional[str]:
        """Return the first product's manufacturer, if any.

        Example:
            >>> data = {"products": [{"manufacturer": "General Mills"}]}
            >>> BarcodeLookupMapper.extract_manufacturer(data)
            'General Mills'
            >>> BarcodeLookupMapper.extract_manufacturer({"products": []}) is None
            True
        """
        products = response_data.get("products") or []
        if not isinstance(products, list) or not products:
            return None

        first = products[0]
        if not isinstance(first, dict):
            return None

        manufacturer = first.get("manufacturer")
        if isinstance(manufacturer, str) and manufacturer.strip():
            return manufacturer.strip()
        return None
