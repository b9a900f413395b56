"""Constants for domain model field names"""

from .captured_image_fields import CapturedImageFields, LocalCaptureFields

__all__ = [
    "CapturedImageFields",
    "LocalCaptureFields",
]
