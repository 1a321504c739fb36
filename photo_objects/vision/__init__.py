"""Remote object detection and result formatting."""

from .detection_client import DetectionClient, DetectionConfig, parse_detect_response
from .formatting import format_result, narration_phrases

__all__ = [
    "DetectionClient",
    "DetectionConfig",
    "format_result",
    "narration_phrases",
    "parse_detect_response",
]
