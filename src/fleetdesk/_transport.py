"""HTTP transport for the REST backend (tables, auth, storage)."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from fleetdesk._constants import USER_AGENT
from fleetdesk._redact import redact_for_log
from fleetdesk.config import FleetConfig
from fleetdesk.exceptions import FleetAuthenticationError, PersistenceError
from fleetdesk.session import AuthSession

_logger = logging.getLogger(__name__)

_AUTH_FAILURE_STATUSES: frozenset[int] = frozenset({401, 403})


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`RestTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        session: AuthSession | None = None,
        params: Mapping[str, str] | None = None,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...

    async def upload_bytes(
        self,
        endpoint: str,
        data: bytes,
        *,
        content_type: str,
        session: AuthSession | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...


class RestTransport:
    """JSON-over-HTTP transport adding ``apikey`` and bearer headers."""

    def __init__(self, config: FleetConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self, session: AuthSession | None, extra: Mapping[str, str] | None) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "apikey": self._config.api_key,
            "user-agent": USER_AGENT,
        }
        if session is not None:
            headers.update(session.auth_headers())
        else:
            headers["authorization"] = f"Bearer {self._config.api_key}"
        if extra:
            headers.update(extra)
        return headers

    async def _send(
        self,
        method: str,
        endpoint: str,
        *,
        headers: dict[str, str],
        params: Mapping[str, str] | None = None,
        data: bytes | str | None = None,
    ) -> Any:
        url = f"{self._config.base_url.rstrip('/')}{endpoint}"
        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except aiohttp.ClientError as exc:
            raise PersistenceError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc
        except TimeoutError as exc:
            raise PersistenceError(f"Request to {endpoint} timed out", endpoint=endpoint) from exc

        if status >= 400:
            error_cls = FleetAuthenticationError if status in _AUTH_FAILURE_STATUSES else PersistenceError
            raise error_cls(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )

        if not text.strip():
            return None

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PersistenceError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("Response from %s: %s", endpoint, redact_for_log(body))
        return body

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        session: AuthSession | None = None,
        params: Mapping[str, str] | None = None,
        json_body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        merged = self._headers(session, headers)
        body: str | None = None
        if json_body is not None:
            merged["content-type"] = "application/json"
            body = json.dumps(json_body, separators=(",", ":"))
            if self._config.api_trace_enabled:
                _logger.debug("Request to %s: %s", endpoint, redact_for_log(json_body))
        return await self._send(method, endpoint, headers=merged, params=params, data=body)

    async def upload_bytes(
        self,
        endpoint: str,
        data: bytes,
        *,
        content_type: str,
        session: AuthSession | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        merged = self._headers(session, headers)
        merged["content-type"] = content_type
        return await self._send("POST", endpoint, headers=merged, data=data)
