"""
Unit tests for the credentialed clients: BarcodeLookup, ethical search
and Lykdat.

A missing credential must fail before any request leaves the process.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from ethical_scan.domain.garment.models import VisualMatch
from ethical_scan.domain.shared.errors import (
    ConfigurationError,
    ExternalServiceError,
    TimeoutError,
    ValidationError,
)
from ethical_scan.domain.shared.value_objects import Barcode
from ethical_scan.infrastructure.barcodelookup.api_client import BarcodeLookupClient
from ethical_scan.infrastructure.ethical_search.api_client import EthicalSearchClient
from ethical_scan.infrastructure.lykdat.api_client import LykdatClient


def _response(status: int, payload: object = None) -> MagicMock:
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)
    return response


# ═══════════════════════════════════════════════════════════
# BARCODELOOKUP
# ═══════════════════════════════════════════════════════════


class TestBarcodeLookupClient:
    async def test_get_manufacturer(self, sample_barcode: Barcode) -> None:
        payload = {"products": [{"barcode_number": "0038000000305", "manufacturer": "General Mills"}]}

        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = _response(200, payload)

            async with BarcodeLookupClient(api_key="test-key") as client:
                manufacturer = await client.get_manufacturer(sample_barcode)

        assert manufacturer == "General Mills"
        assert mock_get.call_args.args[0] == "https://api.barcodelookup.com/v3/products"
        assert mock_get.call_args.kwargs["params"] == {
            "barcode": "0038000000305",
            "formatted": "y",
            "key": "test-key",
        }

    async def test_no_products(self, sample_barcode: Barcode) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = _response(200, {"products": []})

            async with BarcodeLookupClient(api_key="test-key") as client:
                assert await client.get_manufacturer(sample_barcode) is None

    async def test_not_found_404(self, sample_barcode: Barcode) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = _response(404)

            async with BarcodeLookupClient(api_key="test-key") as client:
                assert await client.get_manufacturer(sample_barcode) is None

    async def test_upstream_error_status(self, sample_barcode: Barcode) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = _response(403)

            async with BarcodeLookupClient(api_key="bad-key") as client:
                with pytest.raises(ExternalServiceError, match="403"):
                    await client.get_manufacturer(sample_barcode)

    async def test_missing_key_sends_nothing(self, sample_barcode: Barcode) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            async with BarcodeLookupClient(api_key=None) as client:
                with pytest.raises(ConfigurationError, match="API key not configured"):
                    await client.get_manufacturer(sample_barcode)

        mock_get.assert_not_called()

    async def test_timeout(self, sample_barcode: Barcode) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.side_effect = asyncio.TimeoutError()

            async with BarcodeLookupClient(api_key="test-key") as client:
                with pytest.raises(TimeoutError):
                    await client.get_manufacturer(sample_barcode)


# ═══════════════════════════════════════════════════════════
# ETHICAL SEARCH
# ═══════════════════════════════════════════════════════════


class TestEthicalSearchClient:
    @pytest.fixture
    def client(self) -> EthicalSearchClient:
        return EthicalSearchClient(api_key="search-key", engine_id="engine-id")

    async def test_search_rating(self, client: EthicalSearchClient) -> None:
        payload = {
            "items": [
                {
                    "title": "General Mills | Ethical Consumer",
                    "link": "https://www.ethicalconsumer.org/company-profile/general-mills",
                }
            ]
        }

        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = _response(200, payload)

            async with client:
                rating = await client.search_rating("General Mills")

        assert rating is not None
        assert rating.title == "General Mills | Ethical Consumer"
        assert rating.url.endswith("/general-mills")

        params = mock_get.call_args.kwargs["params"]
        assert params["q"] == "General Mills site:ethicalconsumer.org"
        assert params["key"] == "search-key"
        assert params["cx"] == "engine-id"

    async def test_no_match(self, client: EthicalSearchClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = _response(
                200, {"searchInformation": {"totalResults": "0"}}
            )

            async with client:
                assert await client.search_rating("Unbranded Co") is None

    async def test_error_status_is_no_match(self, client: EthicalSearchClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.return_value.__aenter__.return_value = _response(429)

            async with client:
                assert await client.search_rating("General Mills") is None

    async def test_blank_brand(self, client: EthicalSearchClient) -> None:
        async with client:
            with pytest.raises(ValidationError):
                await client.search_rating("   ")

    @pytest.mark.parametrize(
        ("api_key", "engine_id"),
        [(None, "engine-id"), ("search-key", None), (None, None)],
    )
    async def test_missing_credentials_send_nothing(
        self, api_key: str | None, engine_id: str | None
    ) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            async with EthicalSearchClient(api_key=api_key, engine_id=engine_id) as client:
                with pytest.raises(ConfigurationError):
                    await client.search_rating("General Mills")

        mock_get.assert_not_called()

    async def test_client_error(self, client: EthicalSearchClient) -> None:
        with patch("aiohttp.ClientSession.get") as mock_get:
            mock_get.side_effect = aiohttp.ClientConnectionError("dns failure")

            async with client:
                with pytest.raises(ExternalServiceError):
                    await client.search_rating("General Mills")


# ═══════════════════════════════════════════════════════════
# LYKDAT
# ═══════════════════════════════════════════════════════════


class TestLykdatClient:
    async def test_search(self, png_bytes: bytes) -> None:
        payload = {
            "results": [
                {
                    "title": "Classic Denim Jacket",
                    "brand": "Levi's",
                    "url": "https://shop.example.com/denim-jacket",
                    "image": "https://cdn.example.com/denim-jacket.jpg",
                }
            ]
        }

        with patch("aiohttp.ClientSession.post") as mock_post:
            mock_post.return_value.__aenter__.return_value = _response(200, payload)

            async with LykdatClient(api_key="lykdat-key") as client:
                matches = await client.search(png_bytes, filename="jacket.png", content_type="image/png")

        assert len(matches) == 1
        assert matches[0].title == "Classic Denim Jacket"
        assert mock_post.call_args.args[0] == "https://cloudapi.lykdat.com/v1/global/search"
        assert isinstance(mock_post.call_args.kwargs["data"], aiohttp.FormData)

    async def test_no_results(self, png_bytes: bytes) -> None:
        with patch("aiohttp.ClientSession.post") as mock_post:
            mock_post.return_value.__aenter__.return_value = _response(200, {"results": []})

            async with LykdatClient(api_key="lykdat-key") as client:
                assert await client.search(png_bytes) == []

    async def test_error_status_is_empty(self, png_bytes: bytes) -> None:
        with patch("aiohttp.ClientSession.post") as mock_post:
            mock_post.return_value.__aenter__.return_value = _response(500)

            async with LykdatClient(api_key="lykdat-key") as client:
                assert await client.search(png_bytes) == []

    @pytest.mark.parametrize(
        ("payload", "expected"),
        [
            ({"data": {"result_groups": 5}}, []),
            (
                {"data": {"result_groups": [{"similar_products": [{"name": "x", "images": {"a": 1}}]}]}},
                [VisualMatch(title="x")],
            ),
            ({"data": {"result_groups": [{"similar_products": {"name": "x"}}]}}, []),
        ],
    )
    async def test_malformed_grouped_body(
        self, png_bytes: bytes, payload: dict[str, object], expected: list[VisualMatch]
    ) -> None:
        with patch("aiohttp.ClientSession.post") as mock_post:
            mock_post.return_value.__aenter__.return_value = _response(200, payload)

            async with LykdatClient(api_key="lykdat-key") as client:
                matches = await client.search(png_bytes)

        assert matches == expected

    async def test_malformed_match_fields(self, png_bytes: bytes) -> None:
        payload = {"results": [{"title": {"nested": "object"}}]}

        with patch("aiohttp.ClientSession.post") as mock_post:
            mock_post.return_value.__aenter__.return_value = _response(200, payload)

            async with LykdatClient(api_key="lykdat-key") as client:
                with pytest.raises(ExternalServiceError, match="malformed"):
                    await client.search(png_bytes)

    async def test_mapper_type_error_is_external_error(self, png_bytes: bytes) -> None:
        with (
            patch("aiohttp.ClientSession.post") as mock_post,
            patch(
                "ethical_scan.infrastructure.lykdat.api_client.LykdatMapper.parse_matches",
                side_effect=TypeError("'int' object is not iterable"),
            ),
        ):
            mock_post.return_value.__aenter__.return_value = _response(200, {"data": {}})

            async with LykdatClient(api_key="lykdat-key") as client:
                with pytest.raises(ExternalServiceError, match="Lykdat payload is malformed"):
                    await client.search(png_bytes)

    async def test_missing_key_sends_nothing(self, png_bytes: bytes) -> None:
        with patch("aiohttp.ClientSession.post") as mock_post:
            async with LykdatClient(api_key=None) as client:
                with pytest.raises(ConfigurationError, match="LYKDAT_API_KEY not set"):
                    await client.search(png_bytes)

        mock_post.assert_not_called()

    async def test_empty_image(self) -> None:
        async with LykdatClient(api_key="lykdat-key") as client:
            with pytest.raises(ValidationError, match="No image uploaded"):
                await client.search(b"")

    async def test_timeout(self, png_bytes: bytes) -> None:
        with patch("aiohttp.ClientSession.post") as mock_post:
            mock_post.side_effect = asyncio.TimeoutError()

            async with LykdatClient(api_key="lykdat-key") as client:
                with pytest.raises(TimeoutError):
                    await client.search(png_bytes)
