import os

from photo_objects.core.models import AnalysisResult, DetectedObject
from photo_objects.vision.formatting import (
    format_confidence,
    format_result,
    narration_phrases,
    order_objects,
)


def _result(*items: tuple[list[str], float]) -> AnalysisResult:
    return AnalysisResult(
        objects=[DetectedObject(label=label, confidence=conf) for label, conf in items]
    )


def test_format_confidence_uses_shortest_percentage() -> None:
    assert format_confidence(0.91) == "91"
    assert format_confidence(0.76) == "76"
    assert format_confidence(0.875) == "87.5"
    assert format_confidence(1.0) == "100"
    assert format_confidence(0.0) == "0"


def test_cup_and_table_scenario() -> None:
    result = _result((["cup"], 0.91), (["table"], 0.76))
    assert format_result(result, newline="\n") == "cup Confidence: 91\ntable Confidence: 76\n\n"


def test_empty_result_is_single_blank_line() -> None:
    assert format_result(AnalysisResult(), newline="\n") == "\n"
    assert format_result(AnalysisResult()) == os.linesep


def test_objects_ordered_by_descending_confidence() -> None:
    result = _result((["chair"], 0.4), (["cup"], 0.91), (["table"], 0.76))
    text = format_result(result, newline="\n")
    lines = text.split("\n")
    assert lines == [
        "cup Confidence: 91",
        "table Confidence: 76",
        "chair Confidence: 40",
        "",
        "",
    ]


def test_ties_keep_detection_order() -> None:
    result = _result((["b"], 0.5), (["a"], 0.5), (["c"], 0.9))
    ordered = [obj.label[0] for obj in order_objects(result.objects)]
    assert ordered == ["c", "b", "a"]


def test_ordering_can_be_disabled() -> None:
    result = _result((["chair"], 0.4), (["cup"], 0.91))
    text = format_result(result, order_by_confidence=False, newline="\n")
    assert text == "chair Confidence: 40\ncup Confidence: 91\n\n"


def test_label_path_segments_are_joined_with_newline() -> None:
    result = _result((["Labrador", "dog", "mammal"], 0.8))
    assert format_result(result, newline="\r\n") == (
        "Labrador\r\ndog\r\nmammal Confidence: 80\r\n\r\n"
    )


def test_narration_phrases() -> None:
    result = _result((["table"], 0.76), (["Labrador", "dog"], 0.9))
    assert narration_phrases(result) == ["objects found", "Labrador dog", "table"]
    assert narration_phrases(AnalysisResult()) == []


def test_format_confidence_keeps_all_significant_digits() -> None:
    assert format_confidence(0.1234567) == "12.34567"
    assert format_confidence(0.98765432) == "98.765432"
    assert format_confidence(0.57) == "57"
