"""
Scan domain models.

Request-scoped values for one orchestration run. Nothing here is
persisted or shared between runs.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ethical_scan.domain.ethics.models import EthicalRating
from ethical_scan.domain.garment.models import VisualMatch
from ethical_scan.domain.product.models import NutritionInfo
from ethical_scan.domain.shared.value_objects import Barcode


class ScanPipeline(str, Enum):
    """Which fixed pipeline a scan runs."""

    GROCERY = "grocery"  # decode -> nutrition + manufacturer -> ethical
    GARMENT = "garment"  # visual search only


class ScanRequest(BaseModel):
    """Image payload plus pipeline selector.

    Example:
        >>> request = ScanRequest(image=b"...", pipeline=ScanPipeline.GARMENT)
        >>> assert request.pipeline == ScanPipeline.GARMENT
    """

    model_config = ConfigDict(frozen=True)

    image: bytes = Field(..., min_length=1, description="Raw image bytes")
    pipeline: ScanPipeline = Field(default=ScanPipeline.GROCERY, description="Pipeline selector")
    filename: Optional[str] = Field(None, description="Original upload filename")
    content_type: Optional[str] = Field(None, description="Upload MIME type")


class ScanResult(BaseModel):
    """Grocery pipeline result.

    Optional fields reflect exactly which lookups returned data.

    Attributes:
        barcode: Decoded barcode
        nutrition_info: Nutrition database projection
        manufacturer: Manufacturer name
        ethical_rating: Matching ethical assessment link
        ethical_search_url: Manual ratings search link, set only when a
            manufacturer is known but no rating matched
    """

    model_config = ConfigDict(frozen=True)

    barcode: Barcode
    nutrition_info: Optional[NutritionInfo] = None
    manufacturer: Optional[str] = None
    ethical_rating: Optional[EthicalRating] = None
    ethical_search_url: Optional[str] = None


class GarmentScanResult(BaseModel):
    """Garment pipeline result: the first visual search match."""

    model_config = ConfigDict(frozen=True)

    match: VisualMatch


ScanOutcome = Union[ScanResult, GarmentScanResult]
