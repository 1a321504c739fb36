#!/usr/bin/env python
"""
Run the capture/analysis pipeline against a photo on disk.

The file stands in for the gallery picker; alerts and loading go to the log and,
unless NARRATE_RESULTS=0, detected objects are read aloud with Edge TTS.

Example:
  VISION_ENDPOINT=https://<resource>.cognitiveservices.azure.com VISION_API_KEY=... \
    python scripts/detect_photo.py /absolute/path/to/photo.jpg
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Ensure the repo root is on the import path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from photo_objects.capture import (
    CaptureAnalysisPipeline,
    EdgeSpeech,
    FilePicker,
    GrantAllPermissions,
    LoggingDialogs,
    PipelineConfig,
    load_preview,
)
from photo_objects.core.env import configure_logging, load_dotenv_if_present
from photo_objects.core.models import RunStatus
from photo_objects.vision import DetectionClient, DetectionConfig

logger = logging.getLogger("detect_photo")


def _log_preview(name: str, value: object) -> None:
    if name == "current_image" and value is not None:
        preview = load_preview(value, max_size=320)
        logger.info("Preview ready: %dx%d", *preview.size)


async def _run(image: Path) -> RunStatus:
    config = PipelineConfig.from_env()
    speech = EdgeSpeech.from_env() if config.narrate else None
    async with DetectionClient(DetectionConfig.from_env()) as detector:
        pipeline = CaptureAnalysisPipeline(
            GrantAllPermissions(),
            FilePicker(image),
            detector,
            LoggingDialogs(),
            speech=speech,
            config=config,
        )
        pipeline.ui.subscribe(_log_preview)
        status = await pipeline.pick_picture()
        if status == RunStatus.COMPLETED:
            print(pipeline.ui.result_text, end="")
        return status


def main() -> None:
    parser = argparse.ArgumentParser(description="Detect objects in a single photo.")
    parser.add_argument("image", type=Path, help="Path to the image file to analyze.")
    args = parser.parse_args()

    load_dotenv_if_present()
    configure_logging()
    if not args.image.is_file():
        raise FileNotFoundError(f"Image not found: {args.image}")

    status = asyncio.run(_run(args.image))
    if status != RunStatus.COMPLETED:
        print(f"Run ended: {status.value}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
