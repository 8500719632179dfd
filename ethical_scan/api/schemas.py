"""Request and response models for the REST API."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

from ethical_scan.domain.ethics.models import EthicalRating
from ethical_scan.domain.garment.models import VisualMatch
from ethical_scan.domain.product.models import NutritionInfo
from ethical_scan.domain.scan.models import (
    GarmentScanResult,
    ScanOutcome,
    ScanPipeline,
    ScanResult,
)
from ethical_scan.domain.scan.scan_log import ScanLog, ScanLogEntry


class ErrorResponse(BaseModel):
    """Response model for relay and scan errors."""

    error: str
    detail: Optional[str] = None


# ----------------- Relays -----------------


class BarcodeLookupRequest(BaseModel):
    barcode: Optional[str] = Field(None, description="Barcode to resolve")


class ManufacturerResponse(BaseModel):
    manufacturer: Optional[str] = None


class EthicalSearchRequest(BaseModel):
    brand: Optional[str] = Field(None, description="Manufacturer or brand name")


class EthicalSearchResponse(BaseModel):
    """Matching rating page; both fields null when nothing matched."""

    title: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_rating(cls, rating: Optional[EthicalRating]) -> EthicalSearchResponse:
        if rating is None:
            return cls()
        return cls(title=rating.title, url=rating.url)


class VisualSearchResponse(BaseModel):
    """At most one match: the first result of the search."""

    results: list[VisualMatch] = Field(default_factory=list)


# ----------------- Scan -----------------


class GroceryScanOut(BaseModel):
    barcode: str
    nutrition_info: Optional[NutritionInfo] = None
    manufacturer: Optional[str] = None
    ethical_rating: Optional[EthicalRating] = None
    ethical_search_url: Optional[str] = None

    @classmethod
    def from_result(cls, result: ScanResult) -> GroceryScanOut:
        return cls(
            barcode=result.barcode.value,
            nutrition_info=result.nutrition_info,
            manufacturer=result.manufacturer,
            ethical_rating=result.ethical_rating,
            ethical_search_url=result.ethical_search_url,
        )


class GarmentScanOut(BaseModel):
    match: VisualMatch


class ScanResponse(BaseModel):
    pipeline: ScanPipeline
    result: Union[GroceryScanOut, GarmentScanOut]
    log: list[ScanLogEntry] = Field(default_factory=list)

    @classmethod
    def from_outcome(
        cls, pipeline: ScanPipeline, outcome: ScanOutcome, log: ScanLog
    ) -> ScanResponse:
        result: Union[GroceryScanOut, GarmentScanOut]
        if isinstance(outcome, GarmentScanResult):
            result = GarmentScanOut(match=outcome.match)
        else:
            result = GroceryScanOut.from_result(outcome)
        return cls(pipeline=pipeline, result=result, log=list(log.entries))


class ScanErrorResponse(BaseModel):
    """Terminal pipeline failure plus the progress made before it."""

    error: str
    log: list[ScanLogEntry] = Field(default_factory=list)
