"""Adapter factory.

Creates uninitialized clients from settings; the app lifespan opens
them with ``async with``.

Usage:
    from ethical_scan.infrastructure.factory import create_clients

    clients = create_clients(settings)
    async with clients.nutrition, clients.manufacturer:
        ...
"""

from dataclasses import dataclass

from ethical_scan.config import ScannerSettings
from ethical_scan.infrastructure.barcodelookup.api_client import BarcodeLookupClient
from ethical_scan.infrastructure.ethical_search.api_client import EthicalSearchClient
from ethical_scan.infrastructure.imaging.barcode_decoder import ZbarBarcodeDecoder
from ethical_scan.infrastructure.lykdat.api_client import LykdatClient
from ethical_scan.infrastructure.openfoodfacts.api_client import OpenFoodFactsClient


@dataclass(frozen=True)
class ScannerClients:
    """Concrete adapters for one process."""

    decoder: ZbarBarcodeDecoder
    nutrition: OpenFoodFactsClient
    manufacturer: BarcodeLookupClient
    ethical: EthicalSearchClient
    visual: LykdatClient


def create_clients(settings: ScannerSettings) -> ScannerClients:
    """Build every adapter with its credential and the shared timeout."""
    timeout = settings.http_timeout_seconds
    return ScannerClients(
        decoder=ZbarBarcodeDecoder(),
        nutrition=OpenFoodFactsClient(timeout_seconds=timeout),
        manufacturer=BarcodeLookupClient(
            api_key=settings.barcode_lookup_api_key,
            timeout_seconds=timeout,
        ),
        ethical=EthicalSearchClient(
            api_key=settings.ethical_search_api_key,
            engine_id=settings.ethical_search_engine_id,
            timeout_seconds=timeout,
        ),
        visual=LykdatClient(api_key=settings.lykdat_api_key, timeout_seconds=timeout),
    )
