"""
Barcode decoder backed by zbar.

Reads the image with Pillow and hands a grayscale copy to pyzbar.
Decoding is CPU bound and runs in a worker thread.
"""

import asyncio
import io
from typing import Any, Optional

import structlog
from PIL import Image, UnidentifiedImageError

from ethical_scan.domain.shared.errors import ImageDecodeError

logger = structlog.get_logger(__name__)


class ZbarBarcodeDecoder:
    """IBarcodeDecoder implementation using pyzbar."""

    async def decode(self, image: bytes) -> Optional[str]:
        """Decode the first barcode symbol in an image.

        Args:
            image: Raw image bytes (any format Pillow can open)

        Returns:
            Decoded text, or None if no symbol was found

        Raises:
            ImageDecodeError: If the image cannot be read or zbar is
                unavailable
        """
        return await asyncio.to_thread(self.decode_sync, image)

    def decode_sync(self, image: bytes) -> Optional[str]:
        """Blocking variant of :meth:`decode`."""
        picture = self._open_image(image)
        symbols = self._scan_symbols(picture)

        for symbol in symbols:
            text = symbol.data.decode("utf-8", errors="replace").strip()
            if text:
                logger.info("Barcode decoded", symbology=symbol.type, barcode=text)
                return text

        logger.info("No barcode found in image")
        return None

    @staticmethod
    def _open_image(image: bytes) -> Image.Image:
        if not image:
            raise ImageDecodeError("Empty image")
        try:
            picture = Image.open(io.BytesIO(image))
            picture.load()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageDecodeError(f"Cannot read image: {e}") from e
        return picture.convert("L")

    @staticmethod
    def _scan_symbols(picture: Image.Image) -> list[Any]:
        try:
            from pyzbar import pyzbar
        except ImportError as e:
            raise ImageDecodeError(f"zbar library unavailable: {e}") from e
        return list(pyzbar.decode(picture))
