"""
API layer for the PPE monitor.

Exposes HTTP endpoints under /api/v1 (gallery auth, frame analysis, capture
persistence and the capture gallery).
"""
