from __future__ import annotations

from typing import Optional

from PIL import Image, UnidentifiedImageError

from photo_objects.core.errors import PreviewError

from .providers import ImageHandle


def load_preview(handle: ImageHandle, max_size: Optional[int] = None) -> Image.Image:
    """Decode the acquired photo for display, optionally shrunk to fit max_size."""
    with handle.open_stream() as stream:
        try:
            with Image.open(stream) as img:
                preview = img.convert("RGB")
        except (UnidentifiedImageError, OSError) as exc:
            raise PreviewError(f"Cannot decode image for preview: {exc}") from exc
    if max_size:
        preview.thumbnail((max_size, max_size))
    return preview
