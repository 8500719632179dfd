"""
Ethical rating domain models.
"""

from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field

ETHICAL_CONSUMER_SITE = "ethicalconsumer.org"
ETHICAL_CONSUMER_SEARCH_URL = "https://www.ethicalconsumer.org/search?keywords={keywords}"


class EthicalRating(BaseModel):
    """Link to a third-party ethical assessment of a manufacturer.

    Example:
        >>> rating = EthicalRating(
        ...     title="General Mills rating",
        ...     url="https://example.org/gm",
        ... )
        >>> assert rating.url.startswith("https://")
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="Rating page title")
    url: str = Field(..., min_length=1, description="Rating page URL")


def manual_search_url(manufacturer: str) -> str:
    """Ethical Consumer keyword search link for a manufacturer.

    Example:
        >>> manual_search_url("General Mills")
        'https://www.ethicalconsumer.org/search?keywords=General+Mills'
    """
    return ETHICAL_CONSUMER_SEARCH_URL.format(keywords=quote_plus(manufacturer))
