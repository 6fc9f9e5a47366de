"""Scan orchestration and the request envelope around it."""

from .models import ScanResult, TargetRunStats
from .request import ScanRequest, ScanRequestError, handle_scan_request, parse_scan_request
from .runner import NOTHING_TO_SCAN, ScanPipeline

__all__ = [
    "ScanPipeline",
    "ScanResult",
    "TargetRunStats",
    "ScanRequest",
    "ScanRequestError",
    "parse_scan_request",
    "handle_scan_request",
    "NOTHING_TO_SCAN",
]
