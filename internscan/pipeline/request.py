"""JSON request envelope for the scan entry point."""

import json
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from internscan.logging import get_logger
from internscan.persistence.exceptions import PersistenceError

from .runner import ScanPipeline

logger = get_logger(__name__, component="pipeline")


class ScanRequestError(Exception):
    """The request body could not be parsed into a scan request."""

    pass


class ScanRequest(BaseModel):
    """Body of a scan request: ``{"companyIds"?: [...], "geographies"?: [...]}``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    company_ids: Optional[List[str]] = Field(None, alias="companyIds")
    geographies: Optional[List[str]] = Field(None, alias="geographies")

    @field_validator("company_ids", "geographies")
    @classmethod
    def drop_blank_entries(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return None
        return [item.strip() for item in v if item and item.strip()]


def parse_scan_request(body: Union[str, bytes, Dict[str, Any], None]) -> ScanRequest:
    """Parse a raw body; an empty body means "scan everything".

    Raises:
        ScanRequestError: If the body is not JSON or has the wrong shape
    """
    if body is None:
        return ScanRequest()

    if isinstance(body, (str, bytes)):
        if not body.strip():
            return ScanRequest()
        try:
            body = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ScanRequestError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(body, dict):
        raise ScanRequestError(f"Request body must be a JSON object, got {type(body).__name__}")

    try:
        return ScanRequest.model_validate(body)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ScanRequestError(f"Invalid scan request: {details}") from e


def handle_scan_request(body: Union[str, bytes, Dict[str, Any], None], pipeline: ScanPipeline) -> Dict[str, Any]:
    """Run a scan for a request body and build the response envelope.

    Returns:
        ``{"ok": True, "totalInserted": n, "companiesProcessed": m}`` (plus
        ``"message"`` when there was nothing to scan), or
        ``{"ok": False, "error": "..."}`` for fatal failures
    """
    try:
        request = parse_scan_request(body)
    except ScanRequestError as e:
        logger.warning(
            f"Rejected scan request: {e}",
            extra={"event": "scan.request.invalid"},
        )
        return {"ok": False, "error": str(e)}

    try:
        result = pipeline.run_scan(request.company_ids, request.geographies)
    except PersistenceError as e:
        logger.error(
            f"Scan aborted: {e}",
            extra={"event": "scan.run.aborted", "error_type": type(e).__name__},
        )
        return {"ok": False, "error": str(e)}
    except Exception as e:
        logger.critical(
            f"Unexpected scan failure: {e}",
            extra={"event": "scan.run.aborted", "error_type": type(e).__name__},
            exc_info=True,
        )
        return {"ok": False, "error": str(e)}

    return result.to_response()
