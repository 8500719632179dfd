"""
Shared fixtures for the test suite.

Real-world test case: Cheerios, Barcode 0038000000305, General Mills.
"""

import io
from typing import Any
from unittest.mock import AsyncMock

import pytest
from PIL import Image

from ethical_scan.application.scan.orchestration_service import ScanOrchestrator
from ethical_scan.domain.ethics.models import EthicalRating
from ethical_scan.domain.garment.models import VisualMatch
from ethical_scan.domain.product.models import NutritionInfo
from ethical_scan.domain.scan.ports import (
    IBarcodeDecoder,
    IEthicalRatingLookup,
    IManufacturerLookup,
    INutritionLookup,
    IVisualSearchLookup,
)
from ethical_scan.domain.shared.value_objects import Barcode

CHEERIOS_BARCODE = "0038000000305"


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def sample_barcode() -> Barcode:
    """Sample barcode for Cheerios."""
    return Barcode(value=CHEERIOS_BARCODE)


@pytest.fixture
def sample_nutrition() -> NutritionInfo:
    """Sample nutrition projection for Cheerios."""
    return NutritionInfo(
        product_name="Cheerios",
        brands="General Mills",
        ingredients="Whole grain oats, corn starch, sugar, salt",
        nutriscore="a",
    )


@pytest.fixture
def sample_rating() -> EthicalRating:
    """Sample Ethical Consumer rating page."""
    return EthicalRating(
        title="General Mills | Ethical Consumer",
        url="https://www.ethicalconsumer.org/company-profile/general-mills",
    )


@pytest.fixture
def sample_match() -> VisualMatch:
    """Sample garment match."""
    return VisualMatch(
        title="Classic Denim Jacket",
        brand="Levi's",
        url="https://shop.example.com/denim-jacket",
        image="https://cdn.example.com/denim-jacket.jpg",
    )


@pytest.fixture
def png_bytes() -> bytes:
    """Small real PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (32, 32), "white").save(buffer, format="PNG")
    return buffer.getvalue()


# ═══════════════════════════════════════════════════════════
# PORT MOCKS
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def mock_decoder() -> Any:
    """Decoder that reads the Cheerios barcode."""
    decoder = AsyncMock(spec=IBarcodeDecoder)
    decoder.decode.return_value = CHEERIOS_BARCODE
    return decoder


@pytest.fixture
def mock_nutrition(sample_nutrition: NutritionInfo) -> Any:
    lookup = AsyncMock(spec=INutritionLookup)
    lookup.get_nutrition.return_value = sample_nutrition
    return lookup


@pytest.fixture
def mock_manufacturer() -> Any:
    lookup = AsyncMock(spec=IManufacturerLookup)
    lookup.get_manufacturer.return_value = "General Mills"
    return lookup


@pytest.fixture
def mock_ethical(sample_rating: EthicalRating) -> Any:
    lookup = AsyncMock(spec=IEthicalRatingLookup)
    lookup.search_rating.return_value = sample_rating
    return lookup


@pytest.fixture
def mock_visual(sample_match: VisualMatch) -> Any:
    search = AsyncMock(spec=IVisualSearchLookup)
    search.search.return_value = [sample_match]
    return search


# ═══════════════════════════════════════════════════════════
# APPLICATION FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def orchestrator(
    mock_decoder: Any,
    mock_nutrition: Any,
    mock_manufacturer: Any,
    mock_ethical: Any,
    mock_visual: Any,
) -> ScanOrchestrator:
    """ScanOrchestrator wired to mocked ports."""
    return ScanOrchestrator(
        decoder=mock_decoder,
        nutrition_lookup=mock_nutrition,
        manufacturer_lookup=mock_manufacturer,
        ethical_lookup=mock_ethical,
        visual_search=mock_visual,
    )
