"""
Ports (Interfaces) for Scan Orchestration Dependencies.

Defines abstract interfaces for the decoder and lookup adapters used by
the ScanOrchestrator, so the orchestrator depends on contracts rather
than on the HTTP clients that implement them.

Design Pattern: Ports & Adapters (Hexagonal Architecture)
"""

from typing import Optional, Protocol, runtime_checkable

from ethical_scan.domain.ethics.models import EthicalRating
from ethical_scan.domain.garment.models import VisualMatch
from ethical_scan.domain.product.models import NutritionInfo
from ethical_scan.domain.shared.value_objects import Barcode


@runtime_checkable
class IBarcodeDecoder(Protocol):
    """
    Port for image barcode decoding.

    Binary outcome: the decoded text, or None when no symbol is found.
    """

    async def decode(self, image: bytes) -> Optional[str]:
        """
        Decode the first barcode symbol in an image.

        Args:
            image: Raw image bytes

        Returns:
            Decoded text or None if no barcode found

        Raises:
            ImageDecodeError: If the image cannot be read
        """
        ...


@runtime_checkable
class INutritionLookup(Protocol):
    """Port for the public nutrition database."""

    async def get_nutrition(self, barcode: Barcode) -> Optional[NutritionInfo]:
        """
        Look up nutrition data by barcode.

        Returns:
            NutritionInfo or None when the product is unknown

        Raises:
            ExternalServiceError: On transport or parse failure
        """
        ...


@runtime_checkable
class IManufacturerLookup(Protocol):
    """Port for the manufacturer directory (credentialed)."""

    async def get_manufacturer(self, barcode: Barcode) -> Optional[str]:
        """
        Look up the manufacturer name by barcode.

        Returns:
            Manufacturer name or None when unknown

        Raises:
            ConfigurationError: If the API key is not configured
            ExternalServiceError: On non-success status or transport failure
        """
        ...


@runtime_checkable
class IEthicalRatingLookup(Protocol):
    """Port for the ethical rating search."""

    async def search_rating(self, brand: str) -> Optional[EthicalRating]:
        """
        Find a rating page for a manufacturer or brand name.

        Returns:
            EthicalRating or None when nothing matches

        Raises:
            ConfigurationError: If search credentials are not configured
            ExternalServiceError: On transport or parse failure
        """
        ...


@runtime_checkable
class IVisualSearchLookup(Protocol):
    """Port for garment reverse-image search."""

    async def search(
        self,
        image: bytes,
        filename: str = "image.jpg",
        content_type: str = "image/jpeg",
    ) -> list[VisualMatch]:
        """
        Search products visually similar to an image.

        Returns:
            Matches in relevance order (empty when nothing matches)

        Raises:
            ConfigurationError: If the API key is not configured
            ExternalServiceError: On transport or parse failure
        """
        ...
