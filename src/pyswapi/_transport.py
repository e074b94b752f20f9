"""HTTP transport: a single JSON GET per call."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from pyswapi._urls import secure_url
from pyswapi.config import PyswapiConfig
from pyswapi.exceptions import SwapiTransportError

_logger = logging.getLogger(__name__)


class HttpTransport(Protocol):
    """Structural transport interface used by the fetch commands.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`AiohttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> dict[str, Any]:
        ...


def _error_detail(text: str) -> str | None:
    """Extract the API's human-readable ``detail`` message, if any."""
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        return None
    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail.strip()
    return None


class AiohttpTransport:
    """GET-only JSON transport backed by an :class:`aiohttp.ClientSession`."""

    def __init__(self, config: PyswapiConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, url: str) -> dict[str, Any]:
        """Fetch *url* and return the decoded JSON object.

        Raises :class:`SwapiTransportError` for network failures, timeouts,
        non-2xx responses and bodies that are not a JSON object.
        """
        target = secure_url(url) if self._config.force_https else url.strip()
        headers = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }

        _logger.debug("GET %s", target)

        try:
            async with self._http.get(target, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                status = resp.status
        except aiohttp.ClientError as exc:
            raise SwapiTransportError(f"Request to {target} failed: {exc}", url=target) from exc
        except asyncio.TimeoutError as exc:
            raise SwapiTransportError(f"Request to {target} timed out", url=target) from exc

        if not 200 <= status < 300:
            detail = _error_detail(text)
            raise SwapiTransportError(
                detail or f"HTTP {status} from {target}",
                status_code=status,
                url=target,
            )

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SwapiTransportError(
                f"Invalid JSON from {target}: {text[:200]}",
                status_code=status,
                url=target,
            ) from exc

        if not isinstance(result, dict):
            raise SwapiTransportError(
                f"Expected a JSON object from {target}, got {type(result).__name__}",
                status_code=status,
                url=target,
            )
        return result
