"""
Lykdat data mapper.

Reads two response shapes:
- flat ``{"results": [{title, brand, url, image}]}``
- grouped ``{"data": {"result_groups": [{"similar_products": [...]}]}}``
  where products carry ``name``, ``brand_name``, ``url`` and ``images``.

Entries of the wrong JSON type are skipped.
"""

from typing import Any, Optional

from ethical_scan.domain.garment.models import VisualMatch


class LykdatMapper:
    """Maps Lykdat global search responses to VisualMatch."""

    @staticmethod
    def parse_matches(response_data: dict[str, Any]) -> list[VisualMatch]:
        """Parse all matches in response order.

        Example:
            >>> data = {"results": [{"title": "Jacket", "brand": "Acme"}]}
            >>> [m.title for m in LykdatMapper.parse_matches(data)]
            ['Jacket']
            >>> LykdatMapper.parse_matches({"data": {"result_groups": 5}})
            []
        """
        results = response_data.get("results")
        if isinstance(results, list):
            return [LykdatMapper._from_flat(r) for r in results if isinstance(r, dict)]

        data = response_data.get("data")
        if not isinstance(data, dict):
            return []

        groups = data.get("result_groups")
        if not isinstance(groups, list):
            return []

        matches: list[VisualMatch] = []
        for group in groups:
            if not isinstance(group, dict):
                continue
            products = group.get("similar_products")
            if not isinstance(products, list):
                continue
            for product in products:
                if isinstance(product, dict):
                    matches.append(LykdatMapper._from_grouped(product))
        return matches

    @staticmethod
    def _from_flat(result: dict[str, Any]) -> VisualMatch:
        return VisualMatch(
            title=result.get("title"),
            brand=result.get("brand"),
            url=result.get("url"),
            image=result.get("image"),
        )

    @staticmethod
    def _from_grouped(product: dict[str, Any]) -> VisualMatch:
        return VisualMatch(
            title=product.get("name"),
            brand=product.get("brand_name"),
            url=product.get("url"),
            image=product.get("matching_image") or _first_image(product.get("images")),
        )


def _first_image(images: Any) -> Optional[str]:
    if isinstance(images, list) and images and isinstance(images[0], str):
        return images[0]
    return None
