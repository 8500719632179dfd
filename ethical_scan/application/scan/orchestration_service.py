"""
Scan Orchestration Service.

Runs one of two fixed pipelines over the lookup adapters:

    grocery: decode -> (nutrition || manufacturer) -> ethical_rating
    garment: visual_search

Only the pipeline subject is mandatory (the decoded barcode, or a visual
match). Every other step degrades to "no data" on any failure.

Design Pattern: Service Layer + Dependency Injection (Ports & Adapters)
"""

import asyncio
import time
from typing import Awaitable, Optional, TypeVar

import structlog

from ethical_scan.domain.ethics.models import EthicalRating, manual_search_url
from ethical_scan.domain.product.models import NutritionInfo
from ethical_scan.domain.scan.models import (
    GarmentScanResult,
    ScanOutcome,
    ScanPipeline,
    ScanRequest,
    ScanResult,
)
from ethical_scan.domain.scan.ports import (
    IBarcodeDecoder,
    IEthicalRatingLookup,
    IManufacturerLookup,
    INutritionLookup,
    IVisualSearchLookup,
)
from ethical_scan.domain.scan.scan_log import ScanLog
from ethical_scan.domain.shared.errors import (
    NoBarcodeDetectedError,
    NoVisualMatchError,
    VisualSearchFailedError,
)
from ethical_scan.domain.shared.value_objects import Barcode

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ScanOrchestrator:
    """
    Orchestrates a product scan across the lookup adapters.

    Dependencies (injected via Ports/Interfaces):
    - decoder: IBarcodeDecoder - image to barcode text
    - nutrition_lookup: INutritionLookup - public nutrition database
    - manufacturer_lookup: IManufacturerLookup - manufacturer directory
    - ethical_lookup: IEthicalRatingLookup - ethical rating search
    - visual_search: IVisualSearchLookup - garment reverse-image search

    Holds no per-scan state: one instance serves concurrent scans.

    Example:
        >>> orchestrator = ScanOrchestrator(
        ...     decoder=decoder,
        ...     nutrition_lookup=off_client,
        ...     manufacturer_lookup=barcode_lookup_client,
        ...     ethical_lookup=ethical_client,
        ...     visual_search=lykdat_client,
        ... )
        >>> log = ScanLog()
        >>> result = await orchestrator.scan(ScanRequest(image=data), log)
    """

    def __init__(
        self,
        decoder: IBarcodeDecoder,
        nutrition_lookup: INutritionLookup,
        manufacturer_lookup: IManufacturerLookup,
        ethical_lookup: IEthicalRatingLookup,
        visual_search: IVisualSearchLookup,
    ) -> None:
        self.decoder = decoder
        self.nutrition_lookup = nutrition_lookup
        self.manufacturer_lookup = manufacturer_lookup
        self.ethical_lookup = ethical_lookup
        self.visual_search = visual_search

    async def scan(self, request: ScanRequest, log: Optional[ScanLog] = None) -> ScanOutcome:
        """
        Run the pipeline selected by the request.

        Args:
            request: Image payload and pipeline selector
            log: Progress log to append to (a private one if omitted)

        Returns:
            ScanResult (grocery) or GarmentScanResult (garment)

        Raises:
            NoBarcodeDetectedError: Grocery image has no readable barcode
            NoVisualMatchError: Garment image has no visual match
            VisualSearchFailedError: Visual search could not run
        """
        if log is None:
            log = ScanLog()

        if request.pipeline == ScanPipeline.GARMENT:
            return await self.scan_garment(request, log)
        return await self.scan_grocery(request.image, log)

    # ═══════════════════════════════════════════════════════════
    # GROCERY PIPELINE
    # ═══════════════════════════════════════════════════════════

    async def scan_grocery(self, image: bytes, log: ScanLog) -> ScanResult:
        """Decode, look up nutrition and manufacturer, then the rating."""
        start_time = time.time()
        log.append("Starting barcode scan...")

        barcode = await self.decode_barcode(image, log)
        if barcode is None:
            error = NoBarcodeDetectedError()
            log.append(f"Error: {error}")
            raise error

        # Independent of each other, both depend on the barcode
        nutrition_info, manufacturer = await asyncio.gather(
            self.lookup_nutrition(barcode, log),
            self.lookup_manufacturer(barcode, log),
        )

        ethical_rating: Optional[EthicalRating] = None
        if manufacturer:
            ethical_rating = await self.lookup_ethical_rating(manufacturer, log)

        result = ScanResult(
            barcode=barcode,
            nutrition_info=nutrition_info,
            manufacturer=manufacturer,
            ethical_rating=ethical_rating,
            ethical_search_url=(
                manual_search_url(manufacturer) if manufacturer and not ethical_rating else None
            ),
        )

        log.append("Scan complete!")
        logger.info(
            "Grocery scan completed",
            barcode=barcode.value,
            has_nutrition=nutrition_info is not None,
            has_manufacturer=manufacturer is not None,
            has_rating=ethical_rating is not None,
            total_time_ms=round((time.time() - start_time) * 1000, 2),
        )
        return result

    async def decode_barcode(self, image: bytes, log: ScanLog) -> Optional[Barcode]:
        """Decode step. Any decoder failure counts as "not found"."""
        log.append("Decoding barcode from image...")

        try:
            text = await self.decoder.decode(image)
        except Exception as e:
            log.append(f"Error decoding: {e}")
            logger.warning("Barcode decoding failed", error=str(e))
            return None

        if not text or not text.strip():
            log.append("No barcode found in image")
            return None

        barcode = Barcode(value=text)
        log.append(f"Barcode detected: {barcode.value}")
        return barcode

    async def lookup_nutrition(self, barcode: Barcode, log: ScanLog) -> Optional[NutritionInfo]:
        """Nutrition step."""
        log.append("Fetching OpenFoodFacts data...")

        info = await self._optional_step(
            "nutrition",
            self.nutrition_lookup.get_nutrition(barcode),
            log,
            failure_label="OpenFoodFacts error",
        )

        if info is None or info.is_empty():
            log.append("No OpenFoodFacts data found")
            return None

        log.append("OpenFoodFacts data retrieved")
        return info

    async def lookup_manufacturer(self, barcode: Barcode, log: ScanLog) -> Optional[str]:
        """Manufacturer step."""
        log.append("Looking up manufacturer...")

        manufacturer = await self._optional_step(
            "manufacturer",
            self.manufacturer_lookup.get_manufacturer(barcode),
            log,
            failure_label="Manufacturer lookup error",
        )

        if not manufacturer:
            log.append("No manufacturer data available")
            return None

        log.append(f"Manufacturer found: {manufacturer}")
        return manufacturer

    async def lookup_ethical_rating(self, manufacturer: str, log: ScanLog) -> Optional[EthicalRating]:
        """Ethical rating step. Only reached with a manufacturer name."""
        log.append(f"Searching Ethical Consumer for: {manufacturer}")

        rating = await self._optional_step(
            "ethical_rating",
            self.ethical_lookup.search_rating(manufacturer),
            log,
            failure_label="Ethical Consumer error",
        )

        if rating is None:
            log.append("No ethical ratings found")
            return None

        log.append(f"Ethical rating found: {rating.title}")
        return rating

    # ═══════════════════════════════════════════════════════════
    # GARMENT PIPELINE
    # ═══════════════════════════════════════════════════════════

    async def scan_garment(self, request: ScanRequest, log: ScanLog) -> GarmentScanResult:
        """Visual search; the first match is the result."""
        log.append("Uploading image to visual search...")

        try:
            matches = await self.visual_search.search(
                request.image,
                filename=request.filename or "image.jpg",
                content_type=request.content_type or "image/jpeg",
            )
        except Exception as e:
            log.append(f"Error: visual search failed: {e}")
            logger.warning("Visual search failed", error=str(e))
            raise VisualSearchFailedError(f"visual search failed: {e}") from e

        if not matches:
            error = NoVisualMatchError()
            log.append(f"Error: {error}")
            raise error

        match = matches[0]
        log.append(f"Result found: {match.display_name()}")
        logger.info("Garment scan completed", title=match.title, brand=match.brand)
        return GarmentScanResult(match=match)

    # ═══════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════

    async def _optional_step(
        self,
        step: str,
        call: Awaitable[Optional[T]],
        log: ScanLog,
        failure_label: str,
    ) -> Optional[T]:
        """Await a lookup; any failure becomes None."""
        try:
            return await call
        except Exception as e:
            log.append(f"{failure_label}: {e}")
            logger.warning("Optional scan step failed", step=step, error=str(e))
            return None
