"""Dashboard analysis flow: run one analysis and fold the verdict into a session."""
from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from ..core.errors import (
    AnalysisError,
    AnalysisInProgressError,
    ClientInputError,
    UpstreamQuotaExceeded,
    UpstreamRateLimited,
    UpstreamUnexpectedError,
)
from ..models import AnalysisSession, ContentKind, FlaggedContent, utcnow
from ..policies.moderation import ModerationEngine
from ..schemas.analysis import ModerationIssue, ModerationVerdict
from .relay import ModerationRelay, parse_request

logger = logging.getLogger(__name__)

RELAY_PATHS: dict[ContentKind, str] = {
    ContentKind.TEXT: "/analyze-text",
    ContentKind.IMAGE: "/analyze-image",
}

_ERRORS_BY_STATUS: dict[int, type[AnalysisError]] = {
    400: ClientInputError,
    402: UpstreamQuotaExceeded,
    429: UpstreamRateLimited,
}


class Analyzer(Protocol):
    async def analyze(self, kind: ContentKind, payload: dict[str, Any]) -> ModerationVerdict:
        ...


class MockAnalyzer:
    """Keyword analyzer used before the AI relay existed."""

    def __init__(self, engine: ModerationEngine | None = None) -> None:
        self._engine = engine or ModerationEngine()

    async def analyze(self, kind: ContentKind, payload: dict[str, Any]) -> ModerationVerdict:
        content = parse_request(kind, payload)
        if kind == ContentKind.IMAGE:
            return self._engine.evaluate_image(content)
        return self._engine.evaluate_text(content)


class LocalRelayAnalyzer:
    """Runs the relay pipeline in-process."""

    def __init__(self, relay: ModerationRelay) -> None:
        self._relay = relay

    async def analyze(self, kind: ContentKind, payload: dict[str, Any]) -> ModerationVerdict:
        return await self._relay.analyze_payload(kind, payload)


class RelayClientAnalyzer:
    """Calls a remote relay endpoint over HTTP."""

    def __init__(self, base_url: str, *, client: httpx.AsyncClient | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client

    async def analyze(self, kind: ContentKind, payload: dict[str, Any]) -> ModerationVerdict:
        url = f"{self._base_url}{RELAY_PATHS[kind]}"
        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, json=payload)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamUnexpectedError(f"Relay request failed: {exc}") from exc

        error = data.get("error") if isinstance(data, dict) else None
        if response.is_error or error:
            error_cls = _ERRORS_BY_STATUS.get(response.status_code, UpstreamUnexpectedError)
            raise error_cls(str(error) if error else f"Relay error: {response.status_code}")

        try:
            return ModerationVerdict.model_validate(data)
        except ValidationError as exc:
            raise UpstreamUnexpectedError("Relay returned an invalid verdict") from exc


def to_flagged_items(issues: list[ModerationIssue]) -> list[FlaggedContent]:
    """Attach a synthetic id and a shared capture timestamp to each issue."""
    captured_at = utcnow()
    return [
        FlaggedContent(
            content=issue.content,
            harm_type=issue.harm_type,
            severity=issue.severity,
            reason=issue.reason,
            explanation=issue.explanation,
            timestamp=captured_at,
        )
        for issue in issues
    ]


def apply_verdict(session: AnalysisSession, verdict: ModerationVerdict) -> AnalysisSession:
    """Prepend new items and replace the displayed score and message."""
    session.flagged_items = to_flagged_items(verdict.issues) + session.flagged_items
    session.toxicity_score = verdict.toxicity_score
    session.friendly_message = verdict.friendly_message
    session.last_error = None
    return session


class AnalysisFlow:
    """Run at most one analysis per session at a time."""

    def __init__(self, analyzer: Analyzer) -> None:
        self._analyzer = analyzer

    async def run(
        self, session: AnalysisSession, kind: ContentKind, payload: dict[str, Any]
    ) -> ModerationVerdict:
        if session.is_analyzing:
            raise AnalysisInProgressError()

        session.is_analyzing = True
        try:
            verdict = await self._analyzer.analyze(kind, payload)
        except AnalysisError as exc:
            session.last_error = exc.message
            raise
        except Exception as exc:
            logger.exception("Analysis failed for session %s", session.id)
            session.last_error = str(exc)
            raise UpstreamUnexpectedError(str(exc)) from exc
        finally:
            session.is_analyzing = False

        apply_verdict(session, verdict)
        return verdict
