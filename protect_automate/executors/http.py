"""Disarm through the alarm plugin's HTTP control API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from protect_automate.core.errors import HttpStatusError, ProtocolError, TargetConnectionError
from protect_automate.core.model import ADMIN_UI_PORT, DisarmResult, HttpTarget

LOGGER = logging.getLogger(__name__)


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _is_json_media_type(content_type: str) -> bool:
    media_type = _media_type(content_type)
    return media_type == "application/json" or media_type.endswith("+json")


def _admin_ui_hint(body: str, content_type: str, port: int) -> str | None:
    lowered = body.lower()
    looks_like_html = _media_type(content_type) == "text/html" or "<html" in lowered or "<!doctype html" in lowered
    if looks_like_html and "homebridge" in lowered:
        return (
            f"Port {port} is serving the Homebridge admin UI (default port {ADMIN_UI_PORT}), "
            "not the disarm API. Set httpPort to the port the alarm plugin's API listens on."
        )
    return None


class HttpExecutor:
    """POST ``/disarm`` once and classify the answer.

    ``transport`` is handed to ``httpx.AsyncClient`` unchanged, so callers can
    plug in ``httpx.MockTransport`` or a custom transport.
    """

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def execute(self, target: HttpTarget) -> DisarmResult:
        headers: dict[str, str] = {}
        if target.token:
            headers["Authorization"] = f"Bearer {target.token}"

        LOGGER.info("Sending disarm request to %s", target.url)
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=target.timeout_s) as client:
                response = await client.post(target.url, headers=headers)
        except httpx.ConnectError as exc:
            raise TargetConnectionError(
                f"Connection to {target.url} refused. Is the alarm control API listening on port {target.port}? ({exc})"
            ) from exc
        except httpx.TimeoutException as exc:
            raise TargetConnectionError(
                f"Timed out after {target.timeout_s}s waiting for {target.url} on port {target.port}"
            ) from exc
        except httpx.HTTPError as exc:
            raise TargetConnectionError(f"HTTP request to {target.url} failed: {exc}") from exc

        if not response.is_success:
            raise HttpStatusError(response.status_code, response.text, url=target.url)

        content_type = response.headers.get("content-type", "")
        if not _is_json_media_type(content_type):
            raise ProtocolError(
                f"Expected a JSON response from {target.url}, got '{content_type or 'no content type'}'",
                hint=_admin_ui_hint(response.text, content_type, target.port),
            )

        try:
            body: Any = response.json()
        except ValueError as exc:
            raise ProtocolError(f"Invalid JSON in response from {target.url}: {exc}") from exc

        return DisarmResult(target=target.url, body=body)
