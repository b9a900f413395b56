# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from . import __version__
from .api.v1 import analysis_router, auth_router, captures_router
from .application.use_cases.analysis.analyze_frame import AnalyzeFrameUseCase
from .core.config import get_settings
from .core.logging_config import configure_logging
from .di.container import get_container
from .infrastructure.db.mongo_connection import close_database
from .infrastructure.http_client_factory import close_shared_http_client
from .processing.analysis_loop import AnalysisLoop
from .processing.capture_worker import CapturePersistWorker

logger = logging.getLogger(__name__)

# Global instances
_capture_worker: Optional[CapturePersistWorker] = None
_analysis_loop: Optional[AnalysisLoop] = None


def build_camera_loop(worker: CapturePersistWorker) -> Optional[AnalysisLoop]:
    """Create the analysis loop for CAMERA_SOURCE, or None when no camera is configured"""
    settings = get_settings()
    if not settings.camera_source:
        return None

    # OpenCV is only loaded when a camera is actually configured
    from .infrastructure.media.camera_source import CameraFrameSource

    return AnalysisLoop(
        stream_id="camera-0",
        frame_source=CameraFrameSource(settings.camera_source),
        analyze_use_case=get_container().get(AnalyzeFrameUseCase),
        worker=worker,
        interval_seconds=settings.analysis_interval_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Starts the capture persist worker and, when a camera is configured, the
    periodic analysis loop. Shutdown stops both and closes the shared HTTP
    client and the MongoDB client.
    """
    global _capture_worker, _analysis_loop

    try:
        _capture_worker = get_container().get(CapturePersistWorker)
        _capture_worker.start()
        logger.info("Capture persist worker started during application startup")
    except Exception as e:
        logger.error(f"Failed to start capture persist worker: {e}", exc_info=True)
        _capture_worker = None

    if _capture_worker is not None:
        try:
            _analysis_loop = build_camera_loop(_capture_worker)
            if _analysis_loop is not None:
                _analysis_loop.start()
        except Exception as e:
            # The API stays usable without the camera
            logger.error(f"Failed to start camera analysis loop: {e}", exc_info=True)
            _analysis_loop = None

    yield

    if _analysis_loop is not None:
        await _analysis_loop.stop()
        _analysis_loop = None

    if _capture_worker is not None:
        await _capture_worker.stop()
        _capture_worker = None

    await close_shared_http_client()
    close_database()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file before settings are read
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)
    configure_logging()

    application = FastAPI(
        title="PPE Monitor API",
        version=__version__,
        description="Personal protective equipment detection and capture gallery",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_settings().cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(auth_router, prefix="/api/v1/auth")
    application.include_router(analysis_router, prefix="/api/v1/analysis")
    application.include_router(captures_router, prefix="/api/v1/captures")

    @application.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    return application


# Create application instance
app = create_application()
