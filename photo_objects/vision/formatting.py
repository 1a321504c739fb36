from __future__ import annotations

import os
from typing import Iterable, List

from photo_objects.core.models import AnalysisResult, DetectedObject

OBJECTS_FOUND_PHRASE = "objects found"


def format_confidence(confidence: float) -> str:
    """Render a 0-1 confidence as a percentage (0.91 -> "91", 0.1234567 -> "12.34567")."""
    # Rounding to 10 places drops float noise such as 91.00000000000001.
    text = repr(round(confidence * 100, 10))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def order_objects(
    objects: Iterable[DetectedObject], by_confidence: bool = True
) -> List[DetectedObject]:
    """Highest confidence first; sorted() is stable so ties keep detection order."""
    items = list(objects)
    if not by_confidence:
        return items
    return sorted(items, key=lambda obj: obj.confidence, reverse=True)


def format_object(obj: DetectedObject, newline: str = os.linesep) -> str:
    return newline.join(obj.label) + " Confidence: " + format_confidence(obj.confidence)


def format_result(
    result: AnalysisResult,
    *,
    order_by_confidence: bool = True,
    newline: str = os.linesep,
) -> str:
    """
    Text shown under the photo: one line per object plus a trailing blank line.

    An empty result renders as the trailing blank line alone.
    """
    lines = [
        format_object(obj, newline=newline) + newline
        for obj in order_objects(result.objects, by_confidence=order_by_confidence)
    ]
    return "".join(lines) + newline


def narration_phrases(result: AnalysisResult, *, order_by_confidence: bool = True) -> List[str]:
    """What to say aloud for a result, in the same order as format_result."""
    if result.is_empty:
        return []
    phrases = [OBJECTS_FOUND_PHRASE]
    for obj in order_objects(result.objects, by_confidence=order_by_confidence):
        phrases.append(" ".join(obj.label))
    return phrases
