"""
Domain exceptions.

Typed exceptions for explicit error handling.
The API layer maps each family to an HTTP status.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# CONFIGURATION / INPUT EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ConfigurationError(DomainError):
    """
    Required server-side configuration is missing.

    Raised when:
    - An adapter credential (API key, engine id) is not set

    Fatal for the relay that needs it, never for the process.

    Example:
        >>> raise ConfigurationError("BARCODE_LOOKUP_API_KEY not set")
    """

    pass


class ValidationError(DomainError):
    """
    Input validation failed.

    Raised when:
    - Missing required fields
    - Empty or oversized uploads
    - Unsupported image type

    Example:
        >>> raise ValidationError("Barcode is required")
    """

    pass


# ═══════════════════════════════════════════════════════════
# SCAN PIPELINE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ScanFailedError(DomainError):
    """Base exception for terminal scan pipeline failures."""

    pass


class NoBarcodeDetectedError(ScanFailedError):
    """
    No barcode could be decoded from the image.

    Terminal for the grocery pipeline: no lookup runs without a barcode.
    """

    def __init__(self, message: str = "no barcode detected") -> None:
        super().__init__(message)


class NoVisualMatchError(ScanFailedError):
    """Visual search returned no match for the garment image."""

    def __init__(self, message: str = "no results found") -> None:
        super().__init__(message)


class VisualSearchFailedError(ScanFailedError):
    """Visual search could not be completed (transport or config fault)."""

    pass


class ImageDecodeError(DomainError):
    """
    Image could not be read by the barcode decoder.

    Raised when:
    - Bytes are not a supported image format
    - The zbar shared library is unavailable

    Example:
        >>> raise ImageDecodeError("cannot identify image file")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    External service call failed.

    Base class for all external service errors.

    Raised when:
    - API call fails
    - Network error
    - Response body is not valid JSON

    Example:
        >>> raise ExternalServiceError("BarcodeLookup API error: 503")
    """

    pass


class TimeoutError(ExternalServiceError):  # noqa: A001
    """
    API call timed out.

    Example:
        >>> raise TimeoutError("OpenFoodFacts API timeout")
    """

    pass
