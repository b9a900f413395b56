"""
Processing
----------

Background work that runs next to the HTTP API:
- AnalysisLoop: periodic frame analysis for one camera stream
- CapturePersistWorker: queue consumer that persists auto-captures
"""

from .analysis_loop import AnalysisLoop
from .capture_worker import CapturePersistWorker, CaptureJob

__all__ = ["AnalysisLoop", "CapturePersistWorker", "CaptureJob"]
