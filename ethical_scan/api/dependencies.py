"""Runtime singletons for dependency injection.

The app lifespan opens the clients and registers them here; route
handlers receive them through ``Depends``. Tests replace the getters
with ``app.dependency_overrides``.
"""

from typing import Optional

from ethical_scan.application.scan.orchestration_service import ScanOrchestrator
from ethical_scan.domain.scan.ports import (
    IEthicalRatingLookup,
    IManufacturerLookup,
    IVisualSearchLookup,
)
from ethical_scan.domain.shared.errors import ConfigurationError
from ethical_scan.infrastructure.factory import ScannerClients

_clients: Optional[ScannerClients] = None
_orchestrator: Optional[ScanOrchestrator] = None


def set_runtime(clients: ScannerClients, orchestrator: ScanOrchestrator) -> None:
    global _clients, _orchestrator
    _clients = clients
    _orchestrator = orchestrator


def clear_runtime() -> None:
    global _clients, _orchestrator
    _clients = None
    _orchestrator = None


def _require_clients() -> ScannerClients:
    if _clients is None:
        raise ConfigurationError("Service not initialized")
    return _clients


def get_manufacturer_lookup() -> IManufacturerLookup:
    return _require_clients().manufacturer


def get_ethical_lookup() -> IEthicalRatingLookup:
    return _require_clients().ethical


def get_visual_search() -> IVisualSearchLookup:
    return _require_clients().visual


def get_orchestrator() -> ScanOrchestrator:
    if _orchestrator is None:
        raise ConfigurationError("Service not initialized")
    return _orchestrator
