"""
Shared value objects.

Immutable, validated domain primitives.
Following DDD value object pattern.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Barcode(BaseModel):
    """
    Decoded barcode value object.

    Holds the text of a decoded symbol (EAN/UPC digits, or any other
    symbology the decoder reports). Never empty: a missing barcode is
    expressed as ``None``, not as an empty string.

    Example:
        >>> barcode = Barcode(value="0038000000305")
        >>> assert str(barcode) == "0038000000305"
        >>> assert barcode.is_numeric()
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1, description="Decoded barcode text")

    @field_validator("value")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Ensure not empty or whitespace."""
        if not v.strip():
            raise ValueError("Barcode cannot be empty or whitespace")
        return v.strip()

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __repr__(self) -> str:
        """Debug representation."""
        return f"Barcode('{self.value}')"

    def __hash__(self) -> int:
        """Allow use as dict key."""
        return hash(self.value)

    def is_numeric(self) -> bool:
        """True for EAN/UPC style all-digit codes."""
        return self.value.isdigit()

    @classmethod
    def from_string(cls, s: str) -> Barcode:
        """Create from string."""
        return cls(value=s)
