"""PPE monitor backend: vision-model detection, scoring and capture persistence."""

__version__ = "1.0.0"
