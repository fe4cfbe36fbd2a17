"""Request body helpers shared by the analysis routes."""
from __future__ import annotations

from typing import Any

from fastapi import Request

from ...core.errors import ClientInputError


async def read_json_object(request: Request) -> dict[str, Any]:
    """Return the JSON object body or raise ``ClientInputError``."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise ClientInputError("Request body must be valid JSON") from exc
    if not isinstance(payload, dict):
        raise ClientInputError("Request body must be a JSON object")
    return payload
