"""
Camera Frame Source
-------------------

Reads frames from a local camera index or a stream URL with OpenCV and
hands them to the analysis loop as JPEG bytes.
"""

import asyncio
import logging
import threading
from typing import Optional, Union

import cv2

from .image_utils import encode_frame

logger = logging.getLogger(__name__)


class CameraFrameSource:
    """Lazily opened OpenCV capture; safe to call from the event loop."""

    def __init__(self, source: str, jpeg_quality: int = 80) -> None:
        self.source: Union[int, str] = int(source) if source.isdigit() else source
        self.jpeg_quality = jpeg_quality
        self._capture: Optional["cv2.VideoCapture"] = None
        self._lock = threading.Lock()

    def _open(self) -> "cv2.VideoCapture":
        if self._capture is None or not self._capture.isOpened():
            self._capture = cv2.VideoCapture(self.source)
            if not self._capture.isOpened():
                logger.error(f"Could not open camera source {self.source!r}")
        return self._capture

    def _read_jpeg(self) -> Optional[bytes]:
        with self._lock:
            capture = self._open()
            ok, frame = capture.read()
        if not ok or frame is None:
            logger.warning(f"No frame read from camera source {self.source!r}")
            return None
        return encode_frame(frame, quality=self.jpeg_quality)

    async def __call__(self) -> Optional[bytes]:
        """Read one frame without blocking the event loop"""
        return await asyncio.to_thread(self._read_jpeg)

    def release(self) -> None:
        with self._lock:
            if self._capture is not None:
                self._capture.release()
                self._capture = None
                logger.info(f"Released camera source {self.source!r}")
