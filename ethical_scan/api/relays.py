"""Credential-holding relays for the third-party lookups.

Clients call these instead of the upstream APIs, so API keys stay on the
server. Each relay forwards one request and reshapes the response.

Endpoints:
    POST /api/barcode-lookup   {"barcode"}  -> {"manufacturer"}
    POST /api/ethical-search   {"brand"}    -> {"title", "url"}
    POST /api/lykdat-search    image upload -> {"results": [match]}
"""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, File, UploadFile

from ethical_scan.api.dependencies import (
    get_ethical_lookup,
    get_manufacturer_lookup,
    get_visual_search,
)
from ethical_scan.api.schemas import (
    BarcodeLookupRequest,
    ErrorResponse,
    EthicalSearchRequest,
    EthicalSearchResponse,
    ManufacturerResponse,
    VisualSearchResponse,
)
from ethical_scan.api.uploads import read_image_upload
from ethical_scan.domain.scan.ports import (
    IEthicalRatingLookup,
    IManufacturerLookup,
    IVisualSearchLookup,
)
from ethical_scan.domain.shared.errors import ExternalServiceError, ValidationError
from ethical_scan.domain.shared.value_objects import Barcode

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["relays"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    500: {"model": ErrorResponse, "description": "Configuration or upstream failure"},
}


@router.post(
    "/barcode-lookup",
    response_model=ManufacturerResponse,
    responses=_ERROR_RESPONSES,
)
async def barcode_lookup(
    body: BarcodeLookupRequest,
    lookup: IManufacturerLookup = Depends(get_manufacturer_lookup),
) -> ManufacturerResponse:
    """Resolve a barcode to its manufacturer name.

    An unknown barcode is not an error: the response carries
    ``{"manufacturer": null}``.
    """
    if not body.barcode or not body.barcode.strip():
        raise ValidationError("Barcode is required")

    barcode = Barcode(value=body.barcode)
    logger.info("Barcode lookup request", barcode=barcode.value)

    try:
        manufacturer = await lookup.get_manufacturer(barcode)
    except ExternalServiceError as e:
        logger.error("Barcode lookup failed", barcode=barcode.value, error=str(e))
        raise ExternalServiceError("Failed to lookup barcode") from e

    return ManufacturerResponse(manufacturer=manufacturer)


@router.post(
    "/ethical-search",
    response_model=EthicalSearchResponse,
    responses=_ERROR_RESPONSES,
)
async def ethical_search(
    body: EthicalSearchRequest,
    lookup: IEthicalRatingLookup = Depends(get_ethical_lookup),
) -> EthicalSearchResponse:
    """Find the ethical rating page for a brand."""
    if not body.brand or not body.brand.strip():
        raise ValidationError("Brand is required")

    brand = body.brand.strip()
    logger.info("Ethical search request", brand=brand)

    try:
        rating = await lookup.search_rating(brand)
    except ExternalServiceError as e:
        logger.error("Ethical search failed", brand=brand, error=str(e))
        raise ExternalServiceError("Failed to search ethical ratings") from e

    return EthicalSearchResponse.from_rating(rating)


@router.post(
    "/lykdat-search",
    response_model=VisualSearchResponse,
    responses=_ERROR_RESPONSES,
)
async def lykdat_search(
    image: Optional[UploadFile] = File(None, description="Garment photo"),
    search: IVisualSearchLookup = Depends(get_visual_search),
) -> VisualSearchResponse:
    """Reverse-image search for a garment; returns at most the first match."""
    upload = await read_image_upload(image)
    logger.info("Visual search request", file_name=upload.filename, size=len(upload.data))

    try:
        matches = await search.search(
            upload.data,
            filename=upload.filename,
            content_type=upload.content_type,
        )
    except ExternalServiceError as e:
        logger.error("Visual search failed", error=str(e))
        raise ExternalServiceError("Failed to search image") from e

    return VisualSearchResponse(results=matches[:1])
