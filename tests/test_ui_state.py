import pytest

from photo_objects.core.state import UiState


def test_initial_state_shows_placeholder() -> None:
    state = UiState()
    assert state.current_image is None
    assert state.result_text == ""
    assert state.is_placeholder_visible is True


def test_publish_notifies_changed_fields_only() -> None:
    state = UiState()
    events: list[tuple[str, object]] = []
    state.subscribe(lambda name, value: events.append((name, value)))

    image = object()
    changed = state.publish(current_image=image, result_text="")
    assert changed == ["current_image", "is_placeholder_visible"]
    assert events == [("current_image", image), ("is_placeholder_visible", False)]
    assert state.is_placeholder_visible is False

    events.clear()
    assert state.publish(current_image=image) == []
    assert events == []


def test_clearing_image_restores_placeholder() -> None:
    state = UiState()
    state.publish(current_image=object(), result_text="cup Confidence: 91\n\n")
    state.publish(current_image=None)
    assert state.is_placeholder_visible is True
    assert state.result_text == "cup Confidence: 91\n\n"


def test_unsubscribe_stops_notifications() -> None:
    state = UiState()
    events: list[str] = []

    def listener(name: str, value: object) -> None:
        events.append(name)

    state.subscribe(listener)
    state.unsubscribe(listener)
    state.publish(result_text="x")
    assert events == []


def test_listener_failure_does_not_block_other_listeners() -> None:
    state = UiState()
    seen: list[str] = []

    def broken(name: str, value: object) -> None:
        raise RuntimeError("boom")

    state.subscribe(broken)
    state.subscribe(lambda name, value: seen.append(name))
    state.publish(result_text="text")
    assert seen == ["result_text"]


def test_publish_rejects_unknown_and_derived_fields() -> None:
    state = UiState()
    with pytest.raises(AttributeError):
        state.publish(is_placeholder_visible=False)
    with pytest.raises(AttributeError):
        state.publish(colour="red")
    with pytest.raises(TypeError):
        state.publish(result_text=None)
