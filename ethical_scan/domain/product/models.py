"""
Product domain models.

Narrow projections of the nutrition database and manufacturer
directory responses. Values are kept exactly as the source sent them.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NutritionInfo(BaseModel):
    """Nutrition database projection for one barcode.

    Every field is independently optional: the source may supply any
    subset.

    Example:
        >>> info = NutritionInfo(product_name="Cheerios", nutriscore="B")
        >>> assert info.brands is None
        >>> assert not info.is_empty()
    """

    model_config = ConfigDict(frozen=True)

    product_name: Optional[str] = Field(None, description="Product name")
    brands: Optional[str] = Field(None, description="Brand names (comma separated)")
    ingredients: Optional[str] = Field(None, description="Ingredients list")
    nutriscore: Optional[str] = Field(None, description="Nutri-Score grade letter")

    def is_empty(self) -> bool:
        """True when the source supplied none of the projected fields."""
        return not any((self.product_name, self.brands, self.ingredients, self.nutriscore))
