from __future__ import annotations

from collections.abc import Iterator

import pytest

from fleetmaster.models import AppState

from .factories import make_part, make_vehicle


@pytest.fixture
def three_vehicle_state() -> AppState:
    return AppState(
        vehicles=[make_vehicle("a"), make_vehicle("b"), make_vehicle("c")],
        parts=[make_part("pa1", "a"), make_part("pb1", "b"), make_part("pa2", "a")],
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "FLEET_STORAGE_PATH",
        "FLEET_STORAGE_KEY",
        "FLEET_ROLE",
        "FLEET_ADVISORY_ENABLED",
        "FLEET_ADVISORY_MODEL",
        "FLEET_ADVISORY_BASE_URL",
        "FLEET_ADVISORY_TIMEOUT",
        "FLEET_GEMINI_API_KEY",
        "GEMINI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
