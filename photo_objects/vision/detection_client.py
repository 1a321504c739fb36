from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

import httpx
from pydantic import ValidationError

from photo_objects.core.errors import DetectionError
from photo_objects.core.models import AnalysisResult, BoundingBox, DetectedObject

logger = logging.getLogger(__name__)

_MAX_PARENT_DEPTH = 16


@dataclass
class DetectionConfig:
    endpoint: Optional[str]
    api_key: Optional[str]
    api_version: str = "v3.2"
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "DetectionConfig":
        return cls(
            endpoint=os.getenv("VISION_ENDPOINT"),
            api_key=os.getenv("VISION_API_KEY"),
            api_version=os.getenv("VISION_API_VERSION", "v3.2"),
            timeout=float(os.getenv("VISION_HTTP_TIMEOUT", "30")),
        )

    @property
    def detect_url(self) -> str:
        if not self.endpoint:
            raise DetectionError("VISION_ENDPOINT not set")
        return f"{self.endpoint.rstrip('/')}/vision/{self.api_version}/detect"


class DetectionService(Protocol):
    async def detect_objects(self, image: bytes) -> AnalysisResult: ...


def _label_path(entry: Dict[str, Any]) -> List[str]:
    """Most specific label first, followed by its parent chain."""
    prop = entry.get("objectProperty")
    if isinstance(prop, str) and prop.strip():
        return [prop.strip()]
    if isinstance(prop, list):
        return [str(item).strip() for item in prop if str(item).strip()]

    path: List[str] = []
    node: Any = entry
    while isinstance(node, dict) and len(path) < _MAX_PARENT_DEPTH:
        name = node.get("object")
        if isinstance(name, str) and name.strip():
            path.append(name.strip())
        node = node.get("parent")
    return path


def parse_detect_response(payload: Any) -> AnalysisResult:
    """Turn a detect response body into an AnalysisResult, rejecting malformed entries."""
    if not isinstance(payload, dict):
        raise DetectionError("Unexpected detection response: expected a JSON object")

    raw_objects = payload.get("objects") or []
    if not isinstance(raw_objects, list):
        raise DetectionError("Unexpected detection response: 'objects' is not a list")

    objects: List[DetectedObject] = []
    for index, entry in enumerate(raw_objects):
        if not isinstance(entry, dict):
            raise DetectionError(f"Malformed detected object at index {index}")
        rect = entry.get("rectangle")
        try:
            objects.append(
                DetectedObject(
                    label=_label_path(entry),
                    confidence=entry.get("confidence"),
                    rectangle=BoundingBox.model_validate(rect) if rect else None,
                )
            )
        except ValidationError as exc:
            raise DetectionError(f"Malformed detected object at index {index}: {exc}") from exc

    return AnalysisResult(
        objects=objects,
        request_id=payload.get("requestId"),
        model_version=payload.get("modelVersion"),
    )


def _error_message(response: httpx.Response) -> str:
    detail = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            detail = error.get("message")
        detail = detail or body.get("message")
    if detail:
        return f"Detection request failed ({response.status_code}): {detail}"
    return f"Detection request failed ({response.status_code})"


class DetectionClient:
    """Cloud object detection over HTTP (Azure Computer Vision style detect endpoint)."""

    def __init__(self, config: DetectionConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=config.timeout)

    async def __aenter__(self) -> "DetectionClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def detect_objects(self, image: bytes) -> AnalysisResult:
        if not self.config.api_key:
            raise DetectionError("VISION_API_KEY not set")
        url = self.config.detect_url

        logger.debug("Detect: posting %d bytes to %s", len(image), url)
        try:
            response = await self.client.post(
                url,
                content=image,
                headers={
                    "Ocp-Apim-Subscription-Key": self.config.api_key,
                    "Content-Type": "application/octet-stream",
                },
            )
        except httpx.HTTPError as exc:
            raise DetectionError(f"Detection request failed: {exc}") from exc

        if response.is_error:
            raise DetectionError(_error_message(response), status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise DetectionError("Detection response was not valid JSON") from exc

        result = parse_detect_response(payload)
        logger.debug(
            "Detect: %d objects (request %s, model %s)",
            len(result.objects),
            result.request_id,
            result.model_version,
        )
        return result
