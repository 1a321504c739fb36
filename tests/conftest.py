from __future__ import annotations

import pytest

_ENV_VARS = (
    "VISION_ENDPOINT",
    "VISION_API_KEY",
    "VISION_API_VERSION",
    "VISION_HTTP_TIMEOUT",
    "NARRATE_RESULTS",
    "ORDER_BY_CONFIDENCE",
    "PHOTO_SIZE",
    "LOG_LEVEL",
    "TTS_VOICE",
    "TTS_PLAYER",
    "TTS_CACHE_DIR",
)


@pytest.fixture(autouse=True)
def clean_vision_env(monkeypatch):
    """Keep a developer's shell or .env settings out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
