"""Dashboard session endpoints: snapshot state and run analyses."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from ...models import AnalysisSession, ContentKind, FlaggedContent
from ...schemas.dashboard import (
    AnalysisResultResponse,
    BadgeSchema,
    FlaggedContentSchema,
    MeterSchema,
    SessionSnapshotResponse,
)
from ...services.analysis_flow import AnalysisFlow
from ...services.display import (
    aggregate_severity_score,
    clamp_score,
    derive_tier,
    harm_type_badge,
    severity_badge,
)
from ...services.sessions import SessionStore, get_session_store
from ..deps import get_analysis_flow
from ._body import read_json_object

router = APIRouter(prefix="/dashboard/sessions", tags=["dashboard"])


def meter_score(session: AnalysisSession) -> int:
    """Latest verdict score, or the severity aggregate before any analysis."""
    if session.toxicity_score is not None:
        return clamp_score(session.toxicity_score)
    return aggregate_severity_score(item.severity for item in session.flagged_items)


def _item_response(item: FlaggedContent) -> FlaggedContentSchema:
    return FlaggedContentSchema(
        id=item.id,
        content=item.content,
        harm_type=item.harm_type,
        severity=item.severity,
        reason=item.reason,
        explanation=item.explanation,
        timestamp=item.timestamp,
        harm_type_badge=BadgeSchema.model_validate(harm_type_badge(item.harm_type)),
        severity_badge=BadgeSchema.model_validate(severity_badge(item.severity)),
    )


def snapshot_response(session: AnalysisSession) -> SessionSnapshotResponse:
    score = meter_score(session)
    tier = derive_tier(score)
    return SessionSnapshotResponse(
        id=session.id,
        toxicity_score=session.toxicity_score,
        friendly_message=session.friendly_message,
        is_analyzing=session.is_analyzing,
        last_error=session.last_error,
        meter=MeterSchema(score=score, label=tier.label, color=tier.color, message=tier.message),
        flagged_items=[_item_response(item) for item in session.flagged_items],
    )


@router.post("", status_code=201, response_model=SessionSnapshotResponse)
async def create_session_endpoint(
    store: SessionStore = Depends(get_session_store),
) -> SessionSnapshotResponse:
    return snapshot_response(store.create())


@router.get("/{session_id}", response_model=SessionSnapshotResponse)
async def read_session_endpoint(
    session_id: UUID,
    store: SessionStore = Depends(get_session_store),
) -> SessionSnapshotResponse:
    return snapshot_response(store.get(session_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session_endpoint(
    session_id: UUID,
    store: SessionStore = Depends(get_session_store),
) -> Response:
    store.discard(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


async def _run_analysis(
    kind: ContentKind,
    session_id: UUID,
    request: Request,
    store: SessionStore,
    flow: AnalysisFlow,
) -> AnalysisResultResponse:
    session = store.get(session_id)
    payload = await read_json_object(request)
    verdict = await flow.run(session, kind, payload)
    return AnalysisResultResponse(verdict=verdict, session=snapshot_response(session))


@router.post("/{session_id}/analyze-text", response_model=AnalysisResultResponse)
async def analyze_text_endpoint(
    session_id: UUID,
    request: Request,
    store: SessionStore = Depends(get_session_store),
    flow: AnalysisFlow = Depends(get_analysis_flow),
) -> AnalysisResultResponse:
    return await _run_analysis(ContentKind.TEXT, session_id, request, store, flow)


@router.post("/{session_id}/analyze-image", response_model=AnalysisResultResponse)
async def analyze_image_endpoint(
    session_id: UUID,
    request: Request,
    store: SessionStore = Depends(get_session_store),
    flow: AnalysisFlow = Depends(get_analysis_flow),
) -> AnalysisResultResponse:
    return await _run_analysis(ContentKind.IMAGE, session_id, request, store, flow)
