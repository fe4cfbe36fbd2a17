"""Moderation relay endpoints for text and image content."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from ...core.errors import AnalysisError, UpstreamUnexpectedError
from ...models import ContentKind
from ...schemas.analysis import ErrorResponse, ModerationVerdict
from ...services.relay import ModerationRelay
from ..deps import get_relay
from ._body import read_json_object

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])

_ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_402_PAYMENT_REQUIRED,
        status.HTTP_429_TOO_MANY_REQUESTS,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}


async def relay_request(
    kind: ContentKind, request: Request, relay: ModerationRelay
) -> JSONResponse:
    """Validate, forward and normalize one analysis request."""
    payload = await read_json_object(request)
    try:
        verdict = await relay.analyze_payload(kind, payload)
    except AnalysisError:
        raise
    except Exception as exc:
        logger.exception("Error in analyze-%s", kind)
        raise UpstreamUnexpectedError(str(exc) or None) from exc
    return JSONResponse(content=verdict.to_payload())


@router.post(
    "/analyze-text",
    summary="Analyze text for child safety",
    response_model=ModerationVerdict,
    responses=_ERROR_RESPONSES,
)
async def analyze_text(
    request: Request, relay: ModerationRelay = Depends(get_relay)
) -> JSONResponse:
    return await relay_request(ContentKind.TEXT, request, relay)


@router.post(
    "/analyze-image",
    summary="Analyze an image for child safety",
    response_model=ModerationVerdict,
    responses=_ERROR_RESPONSES,
)
async def analyze_image(
    request: Request, relay: ModerationRelay = Depends(get_relay)
) -> JSONResponse:
    return await relay_request(ContentKind.IMAGE, request, relay)


@router.options("/analyze-text", include_in_schema=False)
@router.options("/analyze-image", include_in_schema=False)
async def preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK)
