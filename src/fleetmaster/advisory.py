"""Best-effort maintenance advisory lookups.

Both public calls degrade to a fixed fallback instead of raising:
:meth:`AdvisoryClient.get_part_maintenance_advice` returns
``ADVISORY_FALLBACK_TEXT`` and :meth:`AdvisoryClient.suggest_common_parts`
returns an empty list.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import TypeAdapter, ValidationError

from fleetmaster._constants import (
    ADVISORY_API_KEY_HEADER,
    ADVISORY_FALLBACK_TEXT,
    ADVISORY_MAX_WORDS,
    ADVISORY_SUGGESTION_COUNT,
)
from fleetmaster._transport import HttpTransport, Transport
from fleetmaster.config import FleetConfig
from fleetmaster.exceptions import FleetAdvisoryError
from fleetmaster.models.advice import PartSuggestion

_logger = logging.getLogger(__name__)

_SUGGESTIONS = TypeAdapter(list[PartSuggestion])

_SUGGESTION_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING"},
            "category": {"type": "STRING"},
            "interval": {"type": "STRING"},
        },
        "required": ["name", "category", "interval"],
    },
}


def _extract_text(response: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise FleetAdvisoryError("response has no candidates")
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise FleetAdvisoryError("candidate has no content parts")
    text = "".join(str(p["text"]) for p in parts if isinstance(p, dict) and "text" in p)
    if not text.strip():
        raise FleetAdvisoryError("candidate text is empty")
    return text.strip()


class AdvisoryClient:
    """Async client for the maintenance advisory service.

    Usage::

        async with AdvisoryClient(config) as advisory:
            tip = await advisory.get_part_maintenance_advice("Oil filter", "Volvo 9400")
    """

    def __init__(
        self,
        config: FleetConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AdvisoryClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session, timeout=self._config.advisory_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return self._config.advisory_available

    def _endpoint(self) -> str:
        base = self._config.advisory_base_url.rstrip("/")
        return f"{base}/models/{self._config.advisory_model}:generateContent"

    async def _generate(self, prompt: str, generation_config: dict[str, Any]) -> str:
        if not self.enabled:
            raise FleetAdvisoryError("advisory service is disabled or has no API key")
        if self._transport is None:
            raise FleetAdvisoryError("advisory client not started; use 'async with AdvisoryClient(...)'")

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        headers = {ADVISORY_API_KEY_HEADER: str(self._config.gemini_api_key)}
        response = await self._transport.post_json(self._endpoint(), payload, headers=headers)
        return _extract_text(response)

    async def get_part_maintenance_advice(self, part_name: str, vehicle_model: str) -> str:
        """Short technical maintenance advice for a part on a vehicle model."""
        prompt = (
            f"Provide short, technical maintenance advice for a {part_name} on a {vehicle_model}. "
            f"Keep it under {ADVISORY_MAX_WORDS} words."
        )
        try:
            return await self._generate(prompt, {"thinkingConfig": {"thinkingBudget": 0}})
        except FleetAdvisoryError as exc:
            _logger.warning("Maintenance advice lookup failed: %s", exc)
            return ADVISORY_FALLBACK_TEXT

    async def suggest_common_parts(self, vehicle_type: str) -> list[PartSuggestion]:
        """The most common replacement parts for a vehicle class."""
        prompt = (
            f"List {ADVISORY_SUGGESTION_COUNT} most common replacement parts "
            f"for a {vehicle_type} in a fleet environment."
        )
        generation_config = {
            "responseMimeType": "application/json",
            "responseSchema": _SUGGESTION_SCHEMA,
        }
        try:
            text = await self._generate(prompt, generation_config)
            return _SUGGESTIONS.validate_json(text)
        except FleetAdvisoryError as exc:
            _logger.warning("Part suggestion lookup failed: %s", exc)
        except ValidationError as exc:
            _logger.warning("Part suggestions were not usable JSON (%d errors)", exc.error_count())
        return []
