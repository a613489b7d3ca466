"""JSON-over-HTTP transport for the advisory service."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from fleetmaster._redact import redact_for_log
from fleetmaster.exceptions import FleetAdvisoryError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the advisory client.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        ...


class HttpTransport:
    """POSTs JSON bodies and decodes JSON object replies."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float = 30.0) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        request_headers: dict[str, str] = {"content-type": "application/json; charset=UTF-8"}
        if headers:
            request_headers.update(headers)

        _logger.debug("POST %s headers=%s", url, redact_for_log(request_headers))

        try:
            async with self._http.post(
                url,
                data=json.dumps(payload),
                headers=request_headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise FleetAdvisoryError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                    )
        except FleetAdvisoryError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            raise FleetAdvisoryError(f"Request to {url} failed: {exc!r}") from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FleetAdvisoryError(f"Invalid JSON from {url}: {text[:200]}") from exc

        if not isinstance(body, dict):
            raise FleetAdvisoryError(f"Expected a JSON object from {url}, got {type(body).__name__}")
        return body
