"""Score-derived display state for the meter and badges."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..models import HarmType, Severity

SAFE_MAX = 33
MODERATE_MAX = 66

SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.HIGH: 30,
    Severity.MEDIUM: 15,
    Severity.LOW: 5,
}


@dataclass(frozen=True, slots=True)
class DisplayTier:
    label: str
    color: str
    message: str


SAFE_TIER = DisplayTier(
    label="Safe",
    color="safe",
    message="Everything looks good! The content appears safe and friendly.",
)
MODERATE_TIER = DisplayTier(
    label="Moderate",
    color="moderate",
    message="Some content may need attention. Take a moment to review flagged items.",
)
HIGH_TIER = DisplayTier(
    label="High",
    color="high",
    message="Some concerning content was found. Please review with a trusted adult.",
)


@dataclass(frozen=True, slots=True)
class Badge:
    label: str
    variant: str


_SEVERITY_BADGES: dict[Severity, Badge] = {
    Severity.LOW: Badge(label="Low", variant="badge-safe"),
    Severity.MEDIUM: Badge(label="Medium", variant="badge-moderate"),
    Severity.HIGH: Badge(label="High", variant="badge-high"),
}

_HARM_TYPE_BADGES: dict[HarmType, Badge] = {
    HarmType.HATE_SPEECH: Badge(label="Hate Speech", variant="hate-speech"),
    HarmType.ABUSE: Badge(label="Abuse", variant="abuse"),
    HarmType.SELF_HARM: Badge(label="Self-Harm", variant="self-harm"),
    HarmType.EXPLICIT: Badge(label="Explicit Content", variant="explicit"),
}


def clamp_score(score: int) -> int:
    return min(100, max(0, score))


def derive_tier(score: int) -> DisplayTier:
    """Map a 0-100 score onto its meter tier."""
    score = clamp_score(score)
    if score <= SAFE_MAX:
        return SAFE_TIER
    if score <= MODERATE_MAX:
        return MODERATE_TIER
    return HIGH_TIER


def severity_badge(severity: Severity) -> Badge:
    return _SEVERITY_BADGES[Severity(severity)]


def harm_type_badge(harm_type: HarmType) -> Badge:
    return _HARM_TYPE_BADGES[HarmType(harm_type)]


def aggregate_severity_score(severities: Iterable[Severity]) -> int:
    """Sum fixed per-severity weights, capped at 100."""
    return min(100, sum(SEVERITY_WEIGHTS[Severity(severity)] for severity in severities))
