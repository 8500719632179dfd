"""
API fixtures: app with mocked ports and an in-process HTTP client.
"""

from typing import Any, AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from ethical_scan.api.dependencies import (
    get_ethical_lookup,
    get_manufacturer_lookup,
    get_orchestrator,
    get_visual_search,
)
from ethical_scan.app import create_app
from ethical_scan.application.scan.orchestration_service import ScanOrchestrator
from ethical_scan.config import ScannerSettings


@pytest.fixture
def app(
    orchestrator: ScanOrchestrator,
    mock_manufacturer: Any,
    mock_ethical: Any,
    mock_visual: Any,
) -> FastAPI:
    application = create_app(ScannerSettings(app_version="1.2.3"))
    application.dependency_overrides[get_manufacturer_lookup] = lambda: mock_manufacturer
    application.dependency_overrides[get_ethical_lookup] = lambda: mock_ethical
    application.dependency_overrides[get_visual_search] = lambda: mock_visual
    application.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
