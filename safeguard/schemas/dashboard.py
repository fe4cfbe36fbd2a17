"""Schemas for dashboard session snapshots."""
from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from ..models import HarmType, Severity
from .analysis import ModerationVerdict


class _CamelSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class BadgeSchema(_CamelSchema):
    label: str
    variant: str


class FlaggedContentSchema(_CamelSchema):
    id: UUID
    content: str
    harm_type: HarmType
    severity: Severity
    reason: str
    explanation: str
    timestamp: datetime
    harm_type_badge: BadgeSchema
    severity_badge: BadgeSchema


class MeterSchema(_CamelSchema):
    score: int
    label: str
    color: str
    message: str


class SessionSnapshotResponse(_CamelSchema):
    id: UUID
    toxicity_score: int | None
    friendly_message: str | None
    is_analyzing: bool
    last_error: str | None
    meter: MeterSchema
    flagged_items: List[FlaggedContentSchema]


class AnalysisResultResponse(_CamelSchema):
    verdict: ModerationVerdict
    session: SessionSnapshotResponse
