from __future__ import annotations


class CaptureError(RuntimeError):
    """Base class for failures inside a capture/analysis run."""


class PermissionDeniedError(CaptureError):
    """Raised when camera or storage access is still not granted after asking."""


class AcquisitionCancelled(CaptureError):
    """Raised when the camera or gallery picker returns without a photo."""


class DetectionError(CaptureError):
    """Raised when the remote object-detection call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PreviewError(CaptureError):
    """Raised when an acquired image cannot be decoded for display."""
