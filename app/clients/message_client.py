from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from ..config import get_settings
from ..schemas import MessageResponse

logger = logging.getLogger(__name__)


class MessageUpdateError(RuntimeError):
    """Raised when the message update endpoint rejects or fails a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def build_message_url(api_url: str, query: Mapping[str, str] | None = None) -> str:
    """Attach the routing query (server and channel ids) to a message address."""

    return str(httpx.URL(api_url, params=dict(query or {})))


def _error_detail(response: httpx.Response) -> str:
    try:
        data: Any = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    return str(data)[:200]


class MessageUpdateClient:
    """Issue partial message updates against the messages endpoint.

    ``api_url`` is ``{base_route}/{message_id}``; relative routes resolve against
    ``base_url`` (``PUBLIC_BASE_URL`` by default).
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.public_base_url).rstrip("/")
        self.timeout = float(timeout if timeout is not None else settings.message_update_timeout)
        self.headers = dict(headers or {})
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            transport=self._transport,
        )

    async def update(self, api_url: str, query: Mapping[str, str], content: str) -> MessageResponse:
        """PATCH ``{"content": content}`` and return the canonical message."""

        try:
            url = build_message_url(api_url, query)
            async with self._client() as client:
                response = await client.patch(url, json={"content": content})
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.exception("Message update request failed | url=%s", api_url)
            raise MessageUpdateError("Message update request failed") from exc

        if response.is_error:
            detail = _error_detail(response)
            logger.warning("Message update returned %s: %s", response.status_code, detail)
            raise MessageUpdateError(detail or "Message update failed", status_code=response.status_code)

        try:
            return MessageResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise MessageUpdateError("Invalid message update response", status_code=response.status_code) from exc


__all__ = ["MessageUpdateClient", "MessageUpdateError", "build_message_url"]
