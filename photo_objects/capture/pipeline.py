from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from photo_objects.core.env import env_flag
from photo_objects.core.errors import AcquisitionCancelled, PermissionDeniedError
from photo_objects.core.models import (
    AnalysisResult,
    CaptureSource,
    MediaOptions,
    PhotoSize,
    PipelineState,
    RunStatus,
)
from photo_objects.core.state import UiState
from photo_objects.vision.detection_client import DetectionService
from photo_objects.vision.formatting import format_result, narration_phrases

from .permissions import CAPTURE_CAPABILITIES, ensure_permissions
from .providers import (
    DialogProvider,
    ImageHandle,
    MediaProvider,
    PermissionProvider,
    SpeechProvider,
)

logger = logging.getLogger(__name__)

PERMISSION_DENIED_TITLE = "Permissions Denied"
PERMISSION_DENIED_BUTTON = "Ok"
PERMISSION_DENIED_MESSAGES = {
    CaptureSource.CAMERA: "Unable to take photos",
    CaptureSource.GALLERY: "Unable to pick photos",
}


@dataclass
class PipelineConfig:
    narrate: bool = True
    order_by_confidence: bool = True
    photo_size: PhotoSize = PhotoSize.MEDIUM
    newline: str = os.linesep

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        return cls(
            narrate=env_flag("NARRATE_RESULTS", True),
            order_by_confidence=env_flag("ORDER_BY_CONFIDENCE", True),
            photo_size=PhotoSize(os.getenv("PHOTO_SIZE", PhotoSize.MEDIUM.value).lower()),
        )


class CaptureAnalysisPipeline:
    """
    Capture or pick a photo, send it for object detection and publish the result.

    One run at a time: each step is awaited in turn and a run started while another
    is in flight is rejected with RunStatus.BUSY.
    """

    def __init__(
        self,
        permissions: PermissionProvider,
        media: MediaProvider,
        detector: DetectionService,
        dialogs: DialogProvider,
        *,
        speech: Optional[SpeechProvider] = None,
        ui: Optional[UiState] = None,
        config: Optional[PipelineConfig] = None,
    ):
        self.permissions = permissions
        self.media = media
        self.detector = detector
        self.dialogs = dialogs
        self.speech = speech
        self.ui = ui or UiState()
        self.config = config or PipelineConfig()
        self._state = PipelineState.IDLE

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state != PipelineState.IDLE

    async def take_picture(self) -> RunStatus:
        return await self.run_capture(CaptureSource.CAMERA)

    async def pick_picture(self) -> RunStatus:
        return await self.run_capture(CaptureSource.GALLERY)

    async def run_capture(self, source: CaptureSource) -> RunStatus:
        if self.busy:
            logger.warning("Capture ignored: a run is already in progress (%s)", self._state.value)
            return RunStatus.BUSY
        # Claimed before the first await so a second caller sees the pipeline as busy.
        self._state = PipelineState.CHECKING_PERMISSIONS
        try:
            return await self._run(source)
        finally:
            self._state = PipelineState.IDLE

    async def _run(self, source: CaptureSource) -> RunStatus:
        try:
            await self._check_permissions(source)
        except PermissionDeniedError as exc:
            await self.dialogs.alert(str(exc), PERMISSION_DENIED_TITLE, PERMISSION_DENIED_BUTTON)
            return RunStatus.PERMISSION_DENIED

        self._state = PipelineState.ACQUIRING
        try:
            handle = await self._acquire(source)
        except AcquisitionCancelled:
            logger.info("Capture cancelled by user (%s)", source.value)
            return RunStatus.CANCELLED

        self._state = PipelineState.LOADING
        with self._loading():
            self.ui.publish(current_image=handle)
            result = await self.analyze_image(handle)
        return RunStatus.COMPLETED if result is not None else RunStatus.FAILED

    async def _check_permissions(self, source: CaptureSource) -> None:
        if not await ensure_permissions(self.permissions, CAPTURE_CAPABILITIES):
            raise PermissionDeniedError(PERMISSION_DENIED_MESSAGES[source])

    async def _acquire(self, source: CaptureSource) -> ImageHandle:
        options = MediaOptions(photo_size=self.config.photo_size)
        if source == CaptureSource.CAMERA:
            handle = await self.media.capture_photo(options)
        else:
            handle = await self.media.pick_photo(options)
        if handle is None:
            raise AcquisitionCancelled(f"No photo returned from {source.value}")
        return handle

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self.dialogs.show_loading()
        try:
            yield
        finally:
            self.dialogs.hide_loading()

    async def analyze_image(self, handle: ImageHandle) -> Optional[AnalysisResult]:
        """
        Upload the photo, then publish its formatted result and narrate it.

        Any failure of the remote call is shown to the user once, clears the result
        text and yields None. The pipeline state is restored to what it was on entry.
        """
        previous = self._state
        try:
            return await self._analyze(handle)
        finally:
            self._state = previous

    async def _analyze(self, handle: ImageHandle) -> Optional[AnalysisResult]:
        self._state = PipelineState.ANALYZING
        try:
            with handle.open_stream() as stream:
                image = stream.read()
            result = await self.detector.detect_objects(image)
        except Exception as exc:
            logger.warning("Object detection failed: %s", exc)
            self.ui.publish(result_text="")
            await self.dialogs.alert(str(exc) or type(exc).__name__)
            return None

        self._state = PipelineState.FORMATTING
        logger.info("Detected %d objects", len(result.objects))
        self.ui.publish(
            result_text=format_result(
                result,
                order_by_confidence=self.config.order_by_confidence,
                newline=self.config.newline,
            )
        )
        if self.config.narrate and self.speech is not None:
            await self._narrate(result)
        return result

    async def _narrate(self, result: AnalysisResult) -> None:
        phrases = narration_phrases(result, order_by_confidence=self.config.order_by_confidence)
        for phrase in phrases:
            try:
                await self.speech.speak(phrase)
            except Exception:
                logger.warning("Narration failed for %r", phrase, exc_info=True)
