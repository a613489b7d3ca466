from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from fleetmaster._constants import ADVISORY_FALLBACK_TEXT
from fleetmaster.advisory import AdvisoryClient
from fleetmaster.config import FleetConfig
from fleetmaster.exceptions import FleetAdvisoryError
from fleetmaster.models import PartSuggestion


def _candidate(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@dataclass
class FakeAdvisoryBackend:
    response: dict[str, Any] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        self.calls.append({"url": url, "payload": dict(payload), "headers": dict(headers or {})})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def config() -> FleetConfig:
    return FleetConfig(gemini_api_key="secret-key")


@pytest.mark.asyncio
async def test_advice_returns_generated_text(config: FleetConfig) -> None:
    backend = FakeAdvisoryBackend(response=_candidate("  Replace every 15,000 km; check seal for cracks.  "))

    async with AdvisoryClient(config, transport=backend) as advisory:
        tip = await advisory.get_part_maintenance_advice("Oil filter", "Volvo 9400")

    assert tip == "Replace every 15,000 km; check seal for cracks."
    call = backend.calls[0]
    assert call["url"].endswith("/models/gemini-3-flash-preview:generateContent")
    assert call["headers"]["x-goog-api-key"] == "secret-key"
    prompt = call["payload"]["contents"][0]["parts"][0]["text"]
    assert "Oil filter" in prompt
    assert "Volvo 9400" in prompt
    assert call["payload"]["generationConfig"]["thinkingConfig"] == {"thinkingBudget": 0}


@pytest.mark.asyncio
async def test_advice_joins_multiple_text_parts(config: FleetConfig) -> None:
    response = {"candidates": [{"content": {"parts": [{"text": "Check "}, {"text": "torque."}]}}]}
    backend = FakeAdvisoryBackend(response=response)

    async with AdvisoryClient(config, transport=backend) as advisory:
        assert await advisory.get_part_maintenance_advice("Wheel nut", "Tata Prima") == "Check torque."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "backend",
    [
        FakeAdvisoryBackend(error=FleetAdvisoryError("HTTP 503", status_code=503)),
        FakeAdvisoryBackend(response={"candidates": []}),
        FakeAdvisoryBackend(response={"promptFeedback": {"blockReason": "SAFETY"}}),
        FakeAdvisoryBackend(response=_candidate("   ")),
    ],
)
async def test_advice_failure_returns_fallback(config: FleetConfig, backend: FakeAdvisoryBackend) -> None:
    async with AdvisoryClient(config, transport=backend) as advisory:
        assert await advisory.get_part_maintenance_advice("Oil filter", "Volvo 9400") == ADVISORY_FALLBACK_TEXT


@pytest.mark.asyncio
async def test_disabled_client_never_calls_service() -> None:
    backend = FakeAdvisoryBackend(response=_candidate("unused"))

    for config in (FleetConfig(), FleetConfig(gemini_api_key="k", advisory_enabled=False)):
        async with AdvisoryClient(config, transport=backend) as advisory:
            assert advisory.enabled is False
            assert await advisory.get_part_maintenance_advice("Oil filter", "Bus") == ADVISORY_FALLBACK_TEXT
            assert await advisory.suggest_common_parts("Bus") == []

    assert backend.calls == []


@pytest.mark.asyncio
async def test_client_outside_context_returns_fallback(config: FleetConfig) -> None:
    advisory = AdvisoryClient(config)

    assert await advisory.get_part_maintenance_advice("Oil filter", "Bus") == ADVISORY_FALLBACK_TEXT


@pytest.mark.asyncio
async def test_suggest_common_parts_parses_json(config: FleetConfig) -> None:
    items = [
        {"name": "Brake pads", "category": "Body", "interval": "30,000 km"},
        {"name": "Air filter", "category": "Engine", "interval": "15,000 km"},
    ]
    backend = FakeAdvisoryBackend(response=_candidate(json.dumps(items)))

    async with AdvisoryClient(config, transport=backend) as advisory:
        suggestions = await advisory.suggest_common_parts("Truck")

    assert suggestions == [PartSuggestion(**item) for item in items]
    generation_config = backend.calls[0]["payload"]["generationConfig"]
    assert generation_config["responseMimeType"] == "application/json"
    assert generation_config["responseSchema"]["items"]["required"] == ["name", "category", "interval"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "backend",
    [
        FakeAdvisoryBackend(error=FleetAdvisoryError("Request failed")),
        FakeAdvisoryBackend(response=_candidate("not json")),
        FakeAdvisoryBackend(response=_candidate('{"name": "only one"}')),
        FakeAdvisoryBackend(response=_candidate('[{"name": "Belt"}]')),
    ],
)
async def test_suggest_common_parts_failure_returns_empty(config: FleetConfig, backend: FakeAdvisoryBackend) -> None:
    async with AdvisoryClient(config, transport=backend) as advisory:
        assert await advisory.suggest_common_parts("Truck") == []
