"""Single relay pipeline shared by the text and image endpoints."""
from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..core.errors import ClientInputError
from ..models import ContentKind
from ..schemas.analysis import (
    ImageAnalysisRequest,
    ModerationVerdict,
    TextAnalysisRequest,
)
from .gateway import AIGatewayClient
from .normalizer import normalize_verdict
from .prompts import VARIANTS, PromptVariant

logger = logging.getLogger(__name__)

TEXT_REQUIRED_MESSAGE = "Please provide text to analyze"
IMAGE_REQUIRED_MESSAGE = "Please provide an image to analyze (base64 or URL)"
IMAGE_AMBIGUOUS_MESSAGE = "Provide either imageBase64 or imageUrl, not both"


def parse_text_request(payload: Any) -> str:
    """Return the text to analyze or raise ``ClientInputError``."""
    if not isinstance(payload, dict):
        raise ClientInputError(TEXT_REQUIRED_MESSAGE)
    try:
        request = TextAnalysisRequest.model_validate(payload, strict=True)
    except ValidationError as exc:
        raise ClientInputError(TEXT_REQUIRED_MESSAGE) from exc
    return request.text


def parse_image_request(payload: Any) -> str:
    """Return the image data URL or URL to analyze or raise ``ClientInputError``."""
    if not isinstance(payload, dict):
        raise ClientInputError(IMAGE_REQUIRED_MESSAGE)
    try:
        request = ImageAnalysisRequest.model_validate(payload, strict=True)
    except ValidationError as exc:
        raise ClientInputError(IMAGE_REQUIRED_MESSAGE) from exc
    if request.image_base64 and request.image_url:
        raise ClientInputError(IMAGE_AMBIGUOUS_MESSAGE)
    if not request.image_reference:
        raise ClientInputError(IMAGE_REQUIRED_MESSAGE)
    return request.image_reference


_PARSERS = {
    ContentKind.TEXT: parse_text_request,
    ContentKind.IMAGE: parse_image_request,
}


def parse_request(kind: ContentKind, payload: Any) -> str:
    return _PARSERS[kind](payload)


class ModerationRelay:
    """Embed content in the variant's prompt, forward it, normalize the reply."""

    def __init__(self, gateway: AIGatewayClient) -> None:
        self._gateway = gateway

    async def analyze(self, variant: PromptVariant, content: str) -> ModerationVerdict:
        logger.info("Analyzing %s for safety...", variant.kind)
        raw = await self._gateway.complete(variant.build_messages(content))
        logger.debug("AI response: %r", raw)
        return normalize_verdict(raw, variant.fallback_message)

    async def analyze_payload(self, kind: ContentKind, payload: Any) -> ModerationVerdict:
        """Validate a raw request body and run the matching variant."""
        content = parse_request(kind, payload)
        return await self.analyze(VARIANTS[kind], content)
