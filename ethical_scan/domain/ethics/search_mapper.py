"""
Ethical search data mapper.

Transforms Google Custom Search JSON responses to EthicalRating.
"""

from typing import Any, Optional

from ethical_scan.domain.ethics.models import ETHICAL_CONSUMER_SITE, EthicalRating


class EthicalSearchMapper:
    """Maps web search results to domain models."""

    @staticmethod
    def build_query(brand: str) -> str:
        """Search query restricted to the ratings site.

        Example:
            >>> EthicalSearchMapper.build_query("General Mills")
            'General Mills site:ethicalconsumer.org'
        """
        return f"{brand.strip()} site:{ETHICAL_CONSUMER_SITE}"

    @staticmethod
    def first_rating(response_data: dict[str, Any]) -> Optional[EthicalRating]:
        """Return the first result carrying both a title and a link.

        Example:
            >>> data = {"items": [{"title": "GM", "link": "https://example.org/gm"}]}
            >>> EthicalSearchMapper.first_rating(data).title
            'GM'
            >>> EthicalSearchMapper.first_rating({}) is None
            True
        """
        items = response_data.get("items") or []
        if not isinstance(items, list):
            return None

        for item in items:
            if not isinstance(item, dict):
                continue
            title = item.get("title")
            link = item.get("link")
            if title and link:
                return EthicalRating(title=title, url=link)

        return None
