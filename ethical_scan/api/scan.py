"""Scan endpoint: runs a full pipeline server-side.

Returns the result together with the timestamped progress log. A terminal
pipeline failure (no barcode, no visual match) answers 422 and still
carries the log up to the failure.
"""

from typing import Optional, Union

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from ethical_scan.api.dependencies import get_orchestrator
from ethical_scan.api.schemas import ErrorResponse, ScanErrorResponse, ScanResponse
from ethical_scan.api.uploads import read_image_upload
from ethical_scan.application.scan.orchestration_service import ScanOrchestrator
from ethical_scan.domain.scan.models import ScanPipeline, ScanRequest
from ethical_scan.domain.scan.scan_log import ScanLog, ScanLogEntry
from ethical_scan.domain.shared.errors import ScanFailedError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["scan"])


@router.post(
    "/scan",
    response_model=ScanResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid upload or pipeline"},
        422: {"model": ScanErrorResponse, "description": "Pipeline found nothing"},
    },
)
async def scan(
    image: Optional[UploadFile] = File(None, description="Product or garment photo"),
    pipeline: ScanPipeline = Form(ScanPipeline.GROCERY),
    orchestrator: ScanOrchestrator = Depends(get_orchestrator),
) -> Union[ScanResponse, JSONResponse]:
    """Run the grocery or garment pipeline over one image.

    Example:
        ```bash
        curl -X POST http://localhost:8080/api/scan \\
          -F "image=@cereal.jpg" -F "pipeline=grocery"
        ```
    """
    upload = await read_image_upload(image)

    log = ScanLog()
    log.subscribe(_log_progress)

    request = ScanRequest(
        image=upload.data,
        pipeline=pipeline,
        filename=upload.filename,
        content_type=upload.content_type,
    )

    try:
        outcome = await orchestrator.scan(request, log)
    except ScanFailedError as e:
        logger.info("Scan ended without result", pipeline=pipeline.value, reason=str(e))
        body = ScanErrorResponse(error=str(e), log=list(log.entries))
        return JSONResponse(status_code=422, content=body.model_dump(mode="json"))

    return ScanResponse.from_outcome(pipeline, outcome, log)


def _log_progress(entry: ScanLogEntry) -> None:
    logger.debug("Scan progress", message=entry.message)
