"""Domain models for the SafeGuard moderation service."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from uuid import UUID, uuid4


class HarmType(StrEnum):
    HATE_SPEECH = "hate-speech"
    ABUSE = "abuse"
    SELF_HARM = "self-harm"
    EXPLICIT = "explicit"


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ContentKind(StrEnum):
    TEXT = "text"
    IMAGE = "image"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FlaggedContent:
    """A moderation issue as shown in the dashboard list."""

    content: str
    harm_type: HarmType
    severity: Severity
    reason: str
    explanation: str
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=utcnow)


@dataclass
class AnalysisSession:
    """Transient per-user dashboard state."""

    id: UUID = field(default_factory=uuid4)
    flagged_items: list[FlaggedContent] = field(default_factory=list)
    toxicity_score: int | None = None
    friendly_message: str | None = None
    is_analyzing: bool = False
    last_error: str | None = None
    created_at: datetime = field(default_factory=utcnow)
