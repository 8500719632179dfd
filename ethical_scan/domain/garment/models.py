"""
Garment visual search domain models.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VisualMatch(BaseModel):
    """One candidate product returned by visual search.

    Example:
        >>> match = VisualMatch(title="Denim jacket", brand="Levi's")
        >>> assert match.url is None
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(None, description="Product title")
    brand: Optional[str] = Field(None, description="Brand name")
    url: Optional[str] = Field(None, description="Product page URL")
    image: Optional[str] = Field(None, description="Product image URL")

    def display_name(self) -> str:
        """Best human-readable label for progress messages."""
        return self.title or self.brand or "Unknown"
