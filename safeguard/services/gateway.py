"""Async client for the upstream chat-completion gateway."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.config import AppSettings, get_settings
from ..core.errors import (
    UpstreamQuotaExceeded,
    UpstreamRateLimited,
    UpstreamUnexpectedError,
)

logger = logging.getLogger(__name__)


class AIGatewayClient:
    """Send one chat-completion request and return the model's message content."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    async def complete(self, messages: list[dict[str, Any]]) -> str | None:
        """Return ``choices[0].message.content`` or ``None`` when absent."""
        api_key = self._settings.ai_gateway_api_key
        if not api_key:
            raise UpstreamUnexpectedError("SAFEGUARD_AI_GATEWAY_API_KEY is not configured")

        request_payload = {"model": self._settings.ai_model, "messages": messages}
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        try:
            if self._client is not None:
                response = await self._client.post(
                    self._settings.ai_gateway_url, json=request_payload, headers=headers
                )
            else:
                async with httpx.AsyncClient(**self._client_options()) as client:
                    response = await client.post(
                        self._settings.ai_gateway_url, json=request_payload, headers=headers
                    )
        except httpx.HTTPError as exc:
            logger.error("AI gateway request failed: %s", exc)
            raise UpstreamUnexpectedError(f"AI Gateway request failed: {exc}") from exc

        if response.status_code == 429:
            raise UpstreamRateLimited()
        if response.status_code == 402:
            raise UpstreamQuotaExceeded()
        if response.is_error:
            logger.error("AI gateway error: %s %s", response.status_code, response.text)
            raise UpstreamUnexpectedError(f"AI Gateway error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamUnexpectedError("AI Gateway returned a non-JSON body") from exc

        return extract_message_content(data)

    def _client_options(self) -> dict[str, Any]:
        if self._settings.upstream_timeout is None:
            return {}
        return {"timeout": self._settings.upstream_timeout}


def extract_message_content(data: Any) -> str | None:
    """Dig the first choice's message content out of a completion payload."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None
