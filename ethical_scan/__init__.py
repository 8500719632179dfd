"""
Ethical Scan.

Scans a product photo and assembles what is publicly known about it:
nutrition data, manufacturer and an ethical rating for grocery items,
or the closest visual match for garments.

Structure:
- domain/: Models, ports and response mappers
- infrastructure/: HTTP clients and the barcode decoder
- application/: Scan orchestration
- api/: REST relays and the scan endpoint
"""

__version__ = "1.0.0"
