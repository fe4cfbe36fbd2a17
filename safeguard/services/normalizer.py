"""Turn the model's raw reply into a validated verdict, failing open."""
from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError

from ..schemas.analysis import ModerationVerdict

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


def strip_code_fences(raw: str) -> str:
    """Remove triple-backtick fences (optionally tagged ``json``) and trim."""
    return _FENCE.sub("", _JSON_FENCE.sub("", raw)).strip()


def fallback_verdict(message: str) -> ModerationVerdict:
    return ModerationVerdict(
        toxicity_score=0,
        issues=[],
        overall_safe=True,
        friendly_message=message,
    )


def normalize_verdict(raw: str | None, fallback_message: str) -> ModerationVerdict:
    """Parse ``raw`` into a verdict.

    Missing content, JSON syntax errors and schema mismatches all produce the
    all-safe fallback verdict instead of an error.
    """
    if raw is None or not raw.strip():
        logger.warning("AI response had no content; using fallback verdict")
        return fallback_verdict(fallback_message)

    cleaned = strip_code_fences(raw)
    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError):
        logger.warning("Failed to parse AI response: %r", raw[:500])
        return fallback_verdict(fallback_message)

    try:
        verdict = ModerationVerdict.model_validate(parsed)
    except ValidationError as exc:
        logger.warning(
            "AI response did not match the verdict schema (%d errors): %r",
            exc.error_count(),
            raw,
        )
        return fallback_verdict(fallback_message)

    if verdict.overall_safe != (not verdict.issues):
        logger.info(
            "Verdict overallSafe=%s disagrees with %d issue(s)",
            verdict.overall_safe,
            len(verdict.issues),
        )
    return verdict
