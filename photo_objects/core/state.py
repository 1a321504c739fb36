from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]

_PUBLISHABLE = ("current_image", "result_text")


class UiState:
    """
    View-bound state for the capture screen.

    The pipeline is the only writer and updates it through publish(); the rendering
    layer reads the properties and subscribes for change notifications. Listeners
    receive (field_name, new_value) only for fields whose value actually changed.
    """

    def __init__(self) -> None:
        self._current_image: Optional[Any] = None
        self._result_text = ""
        self._listeners: list[Listener] = []

    @property
    def current_image(self) -> Optional[Any]:
        return self._current_image

    @property
    def result_text(self) -> str:
        return self._result_text

    @property
    def is_placeholder_visible(self) -> bool:
        return self._current_image is None

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, **changes: Any) -> list[str]:
        """Apply field updates together, then notify listeners. Returns changed fields."""
        for name in changes:
            if name not in _PUBLISHABLE:
                raise AttributeError(f"UiState has no publishable field {name!r}")
        if "result_text" in changes and not isinstance(changes["result_text"], str):
            raise TypeError("result_text must be a string")

        placeholder_before = self.is_placeholder_visible
        changed: list[str] = []
        for name, value in changes.items():
            attr = f"_{name}"
            if getattr(self, attr) is value or getattr(self, attr) == value:
                continue
            setattr(self, attr, value)
            changed.append(name)
        if self.is_placeholder_visible != placeholder_before:
            changed.append("is_placeholder_visible")

        for name in changed:
            self._notify(name, getattr(self, name))
        return changed

    def _notify(self, name: str, value: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(name, value)
            except Exception:
                logger.exception("UiState listener failed for %s", name)
