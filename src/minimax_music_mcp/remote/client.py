"""
AIML API Audio Generation Client.

Thin async wrapper around the AIML ``/v2/generate/audio`` endpoint:

    POST {base_url}                      -> start a generation
    GET  {base_url}?generation_id=<id>   -> read its current state

Both calls send ``Authorization: Bearer <key>``. Keys that already carry
the "Bearer " prefix are sent unchanged.

Failure Mapping:
    - Non-2xx status      -> RemoteRequestFailed(http_status=<status>)
    - Undecodable body    -> RemoteRequestFailed(http_status=<status>)
    - Transport fault     -> RemoteRequestFailed(http_status=None)

Each call is a single attempt. Nothing is retried, and no timeout is
imposed beyond the configured one (or the httpx default when unset).
"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from minimax_music_mcp.core.config import AimlConfig, Defaults
from minimax_music_mcp.core.errors import RemoteRequestFailed
from minimax_music_mcp.core.logging import get_logger, info, verbose, warn

_LOG = get_logger("minimax-mcp.client")

BEARER_PREFIX = "Bearer "


def authorization_header(api_key: str) -> str:
    """Return the Authorization header value, adding "Bearer " only once."""
    if api_key.startswith(BEARER_PREFIX):
        return api_key
    return f"{BEARER_PREFIX}{api_key}"


class AimlAudioClient:
    """
    Async client for the AIML audio generation endpoint.

    A fresh httpx.AsyncClient is opened per call; the server holds no
    connection state between tool invocations.

    Args:
        base_url: Generation endpoint URL.
        timeout_s: Request timeout in seconds; None keeps the httpx default.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str = Defaults.AIML_BASE_URL,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._transport = transport

    @classmethod
    def from_config(cls, config: AimlConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> "AimlAudioClient":
        return cls(base_url=config.base_url, timeout_s=config.timeout_s, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _client_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if self._timeout_s is not None:
            kwargs["timeout"] = self._timeout_s
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    @staticmethod
    def _headers(api_key: str) -> Dict[str, str]:
        return {
            "Authorization": authorization_header(api_key),
            "Content-Type": "application/json",
        }

    async def submit(self, payload: Dict[str, Any], api_key: str) -> Any:
        """
        Start a new generation.

        Args:
            payload: JSON body ({model, prompt, reference_audio_url?}).
            api_key: AIML API key.

        Returns:
            Decoded JSON body, not yet validated.

        Raises:
            RemoteRequestFailed: On transport fault, non-2xx status or bad JSON.
        """
        verbose(_LOG, "remote_submit_start", model=payload.get("model"), fields=sorted(payload))
        return await self._send(
            "POST",
            action="Failed to generate audio",
            api_key=api_key,
            json=payload,
        )

    async def check_status(self, generation_id: str, api_key: str) -> Any:
        """
        Read the current state of a generation.

        Args:
            generation_id: Id returned by an earlier submit.
            api_key: AIML API key.

        Returns:
            Decoded JSON body, not yet validated.

        Raises:
            RemoteRequestFailed: On transport fault, non-2xx status or bad JSON.
        """
        verbose(_LOG, "remote_poll_start", generation_id=generation_id)
        return await self._send(
            "GET",
            action="Failed to check generation status",
            api_key=api_key,
            params={"generation_id": generation_id},
        )

    async def _send(self, method: str, action: str, api_key: str, **request_kwargs: Any) -> Any:
        t0 = time.perf_counter()
        try:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.request(
                    method,
                    self._base_url,
                    headers=self._headers(api_key),
                    **request_kwargs,
                )
        except httpx.HTTPError as e:
            detail = str(e) or type(e).__name__
            warn(_LOG, "remote_transport_error", method=method, error=detail,
                 seconds=time.perf_counter() - t0)
            raise RemoteRequestFailed(f"{action}: {detail}") from e

        elapsed = time.perf_counter() - t0
        if not response.is_success:
            warn(_LOG, "remote_http_error", method=method, http_status=response.status_code, seconds=elapsed)
            raise RemoteRequestFailed(
                f"{action}: HTTP {response.status_code}",
                http_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            warn(_LOG, "remote_body_not_json", method=method, http_status=response.status_code)
            raise RemoteRequestFailed(
                f"{action}: response body is not valid JSON ({e})",
                http_status=response.status_code,
            ) from e

        info(_LOG, "remote_ok", method=method, http_status=response.status_code, seconds=elapsed)
        return data
