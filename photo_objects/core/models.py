from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CaptureSource(str, Enum):
    CAMERA = "camera"
    GALLERY = "gallery"


class Capability(str, Enum):
    CAMERA = "camera"
    STORAGE = "storage"


class PermissionStatus(str, Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    GRANTED = "granted"


class PhotoSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    FULL = "full"


class RunStatus(str, Enum):
    """Terminal outcome of one capture/analysis run."""

    COMPLETED = "completed"
    PERMISSION_DENIED = "permission_denied"
    CANCELLED = "cancelled"
    FAILED = "failed"
    BUSY = "busy"


class PipelineState(str, Enum):
    IDLE = "idle"
    CHECKING_PERMISSIONS = "checking_permissions"
    ACQUIRING = "acquiring"
    LOADING = "loading"
    ANALYZING = "analyzing"
    FORMATTING = "formatting"


class MediaOptions(BaseModel):
    """Options handed to the camera or gallery picker."""

    photo_size: PhotoSize = PhotoSize.MEDIUM


class BoundingBox(BaseModel):
    """Pixel rectangle of a detected object in the uploaded image."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    w: int
    h: int


class DetectedObject(BaseModel):
    """One detection; label runs from the most specific class to its ancestors."""

    model_config = ConfigDict(frozen=True)

    label: tuple[str, ...] = Field(min_length=1)
    confidence: float = Field(ge=0.0, le=1.0)
    rectangle: Optional[BoundingBox] = None

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, v: object) -> object:
        if isinstance(v, str):
            return (v,)
        return v


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    objects: tuple[DetectedObject, ...] = ()
    request_id: Optional[str] = None
    model_version: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.objects
