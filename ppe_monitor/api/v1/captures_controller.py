"""
Capture API.

Endpoints:
  POST   /captures                 queue a frame for the persist worker (202)
  GET    /captures                 gallery listing (token required)
  DELETE /captures/{id}            delete one capture (token required)
  POST   /captures/delete          bulk delete (token required)
  POST   /captures/migrate         push local-only captures to remote storage (token required)
  GET    /captures/objects/{name}  stored image bytes
"""

# Standard library imports
import json
import logging
from typing import Any, Dict

# External package imports
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

# Local application imports
from ...application.dto.capture_dto import (
    CaptureListResponse,
    CaptureQueuedResponse,
    CaptureRequest,
    DeleteCapturesRequest,
    DeleteCapturesResponse,
    MigrationResponse,
)
from ...application.use_cases.capture.delete_captures import DeleteCapturesUseCase
from ...application.use_cases.capture.list_captures import ListCapturesUseCase
from ...application.use_cases.capture.migrate_captures import MigrateLocalCapturesUseCase
from ...core.config import get_settings
from ...detection.normalizer import normalize
from ...di.container import get_container
from ...domain.models.detection import MalformedResponse
from ...domain.repositories.object_store import ObjectStore
from ...exceptions import PPEMonitorError
from ...infrastructure.media.image_utils import decode_image_input
from ...processing.capture_worker import CapturePersistWorker
from .dependencies import require_gallery_access
from .errors import http_error_for

logger = logging.getLogger(__name__)

router = APIRouter(tags=["captures"])


@router.post("", response_model=CaptureQueuedResponse, status_code=status.HTTP_202_ACCEPTED)
async def queue_capture(request: CaptureRequest) -> CaptureQueuedResponse:
    """
    Hand a frame and its analysis to the persist worker

    Returns immediately; the worker stores the capture remotely or, when
    that fails, in the local fallback store.
    """
    max_bytes = get_settings().max_upload_mb * 1024 * 1024
    try:
        image, content_type = decode_image_input(request.image, max_bytes)
    except PPEMonitorError as e:
        raise http_error_for(e)

    analysis = normalize(json.dumps(request.analysis))
    if isinstance(analysis, MalformedResponse):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid analysis: {analysis.reason}",
        )

    worker = get_container().get(CapturePersistWorker)
    capture_id = worker.submit(image, analysis, content_type=content_type)
    if capture_id is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Capture queue is full, try again shortly",
        )
    return CaptureQueuedResponse(capture_id=capture_id)


@router.get("", response_model=CaptureListResponse)
async def list_captures(
    limit: int = Query(default=100, ge=1, le=500),
    _claims: Dict[str, Any] = Depends(require_gallery_access),
) -> CaptureListResponse:
    """List captures newest first, merged with captures not yet synced"""
    list_use_case = get_container().get(ListCapturesUseCase)
    try:
        return await list_use_case.execute(limit=limit)
    except PPEMonitorError as e:
        logger.error(f"Listing captures failed: {e.message}")
        raise http_error_for(e)


@router.delete("/{capture_id}", response_model=DeleteCapturesResponse)
async def delete_capture(
    capture_id: str,
    _claims: Dict[str, Any] = Depends(require_gallery_access),
) -> DeleteCapturesResponse:
    delete_use_case = get_container().get(DeleteCapturesUseCase)
    try:
        result = await delete_use_case.execute([capture_id])
    except PPEMonitorError as e:
        raise http_error_for(e)
    if result.deleted == 0 and result.warning is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Capture not found")
    return result


@router.post("/delete", response_model=DeleteCapturesResponse)
async def delete_captures(
    request: DeleteCapturesRequest,
    _claims: Dict[str, Any] = Depends(require_gallery_access),
) -> DeleteCapturesResponse:
    delete_use_case = get_container().get(DeleteCapturesUseCase)
    try:
        return await delete_use_case.execute(request.ids)
    except PPEMonitorError as e:
        raise http_error_for(e)


@router.post("/migrate", response_model=MigrationResponse)
async def migrate_captures(
    _claims: Dict[str, Any] = Depends(require_gallery_access),
) -> MigrationResponse:
    """Push local-only captures to the object and metadata stores"""
    migrate_use_case = get_container().get(MigrateLocalCapturesUseCase)
    report = await migrate_use_case.execute()
    return MigrationResponse.from_report(report)


@router.get("/objects/{name}")
async def get_capture_object(name: str) -> Response:
    """Stream a stored image back to the browser"""
    object_store = get_container().get(ObjectStore)
    try:
        stored = await object_store.download(name)
    except PPEMonitorError as e:
        raise http_error_for(e)
    if stored is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    data, content_type = stored
    return Response(content=data, media_type=content_type)
