"""
Frame analysis API.

Endpoints:
  POST /analysis         image as a data URI, returns the normalized analysis
  POST /analysis/upload  multipart image, analysis plus the capture outcome
"""

# Standard library imports
import logging

# External package imports
from fastapi import APIRouter, File, HTTPException, UploadFile, status

# Local application imports
from ...application.dto.analysis_dto import AnalysisResponse, AnalyzeFrameRequest, UploadAnalysisResponse
from ...application.dto.capture_dto import PersistOutcomeResponse
from ...application.use_cases.analysis.analyze_frame import AnalyzeFrameUseCase
from ...application.use_cases.capture.persist_capture import PersistCaptureUseCase
from ...core.config import get_settings
from ...detection.alerts import should_capture
from ...di.container import get_container
from ...exceptions import PPEMonitorError
from .errors import http_error_for

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])

UPLOAD_CHUNK_BYTES = 1024 * 1024


@router.post("", response_model=AnalysisResponse)
async def analyze_frame(request: AnalyzeFrameRequest) -> AnalysisResponse:
    """
    Analyze one frame

    Returns:
        AnalysisResponse with persons, missing equipment, coverage confidence and alert
    """
    container = get_container()
    analyze_use_case = container.get(AnalyzeFrameUseCase)

    try:
        analysis = await analyze_use_case.execute(
            request.image,
            prompt=request.prompt,
            response_format=request.format,
        )
    except PPEMonitorError as e:
        logger.warning(f"Frame analysis failed: {e.message}")
        raise http_error_for(e)
    return analysis.to_response()


@router.post("/upload", response_model=UploadAnalysisResponse)
async def analyze_upload(file: UploadFile = File(...)) -> UploadAnalysisResponse:
    """
    Analyze an uploaded image and keep it when a person with equipment is in view
    """
    max_bytes = get_settings().max_upload_mb * 1024 * 1024

    data = bytearray()
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        data.extend(chunk)
        if len(data) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Image exceeds the {max_bytes // (1024 * 1024)} MB limit",
            )
    if not data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Empty upload",
        )

    container = get_container()
    analyze_use_case = container.get(AnalyzeFrameUseCase)
    try:
        analysis = await analyze_use_case.analyze_bytes(bytes(data))
    except PPEMonitorError as e:
        logger.warning(f"Upload analysis failed for {file.filename!r}: {e.message}")
        raise http_error_for(e)

    capture = None
    if should_capture(analysis.result):
        persist_use_case = container.get(PersistCaptureUseCase)
        outcome = await persist_use_case.execute(bytes(data), analysis.result)
        capture = PersistOutcomeResponse.from_outcome(outcome)

    return UploadAnalysisResponse(analysis=analysis.to_response(), capture=capture)
