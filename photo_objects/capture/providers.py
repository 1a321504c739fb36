from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Mapping, Optional, Protocol

from photo_objects.core.models import Capability, MediaOptions, PermissionStatus

logger = logging.getLogger(__name__)


class ImageHandle(Protocol):
    def open_stream(self) -> BinaryIO: ...


class PermissionProvider(Protocol):
    async def check_status(self, capability: Capability) -> PermissionStatus: ...

    async def request(
        self, capabilities: Iterable[Capability]
    ) -> Mapping[Capability, PermissionStatus]: ...


class MediaProvider(Protocol):
    async def capture_photo(self, options: MediaOptions) -> Optional[ImageHandle]: ...

    async def pick_photo(self, options: MediaOptions) -> Optional[ImageHandle]: ...


class SpeechProvider(Protocol):
    async def speak(self, text: str) -> None: ...


class DialogProvider(Protocol):
    async def alert(
        self, message: str, title: Optional[str] = None, button: Optional[str] = None
    ) -> None: ...

    def show_loading(self) -> None: ...

    def hide_loading(self) -> None: ...


class FileImage:
    """Re-openable image handle backed by a file on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def open_stream(self) -> BinaryIO:
        return self.path.open("rb")

    def __repr__(self) -> str:
        return f"FileImage({str(self.path)!r})"


class FilePicker:
    """Media provider that hands back a fixed file for both camera and gallery."""

    def __init__(self, path: str | Path | None):
        self.path = Path(path) if path is not None else None
        self.requests: list[MediaOptions] = []

    async def _select(self, options: MediaOptions) -> Optional[FileImage]:
        self.requests.append(options)
        if self.path is None or not self.path.is_file():
            return None
        return FileImage(self.path)

    async def capture_photo(self, options: MediaOptions) -> Optional[FileImage]:
        return await self._select(options)

    async def pick_photo(self, options: MediaOptions) -> Optional[FileImage]:
        return await self._select(options)


class GrantAllPermissions:
    """Permission provider for desktop runs where nothing is OS-gated."""

    async def check_status(self, capability: Capability) -> PermissionStatus:
        return PermissionStatus.GRANTED

    async def request(
        self, capabilities: Iterable[Capability]
    ) -> Mapping[Capability, PermissionStatus]:
        return {capability: PermissionStatus.GRANTED for capability in capabilities}


class LoggingDialogs:
    """Dialog provider that writes alerts and busy transitions to the log."""

    def __init__(self) -> None:
        self.alerts: list[str] = []
        self.loading = False

    async def alert(
        self, message: str, title: Optional[str] = None, button: Optional[str] = None
    ) -> None:
        self.alerts.append(message)
        if title:
            logger.warning("%s: %s", title, message)
        else:
            logger.warning("%s", message)

    def show_loading(self) -> None:
        self.loading = True
        logger.info("Loading...")

    def hide_loading(self) -> None:
        self.loading = False
        logger.debug("Loading finished")
