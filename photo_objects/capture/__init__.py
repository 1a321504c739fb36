"""
Capture-to-result orchestration for the object detection screen.

load_preview decodes UiState.current_image for the rendering layer.
"""

from .permissions import ensure_permissions
from .pipeline import CaptureAnalysisPipeline, PipelineConfig
from .preview import load_preview
from .providers import FileImage, FilePicker, GrantAllPermissions, LoggingDialogs
from .speech import EdgeSpeech, SpeechConfig

__all__ = [
    "CaptureAnalysisPipeline",
    "EdgeSpeech",
    "FileImage",
    "FilePicker",
    "GrantAllPermissions",
    "LoggingDialogs",
    "PipelineConfig",
    "SpeechConfig",
    "ensure_permissions",
    "load_preview",
]
