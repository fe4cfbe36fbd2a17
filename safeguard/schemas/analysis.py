"""Wire schemas for the moderation relay."""
from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from ..models import HarmType, Severity


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _normalize_label(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower().replace("_", "-").replace(" ", "-")
    return value


class ModerationIssue(_CamelModel):
    harm_type: HarmType
    severity: Severity
    content: str
    reason: str
    explanation: str

    @field_validator("harm_type", "severity", mode="before")
    @classmethod
    def normalize_labels(cls, value: Any) -> Any:
        return _normalize_label(value)


class ModerationVerdict(_CamelModel):
    toxicity_score: int = Field(ge=0, le=100)
    issues: list[ModerationIssue]
    overall_safe: bool
    friendly_message: str

    @field_validator("toxicity_score", mode="before")
    @classmethod
    def coerce_score(cls, value: Any) -> Any:
        # bool is an int subclass; a true/false score is a schema mismatch
        if isinstance(value, bool):
            raise ValueError("toxicityScore must be a number")
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError("toxicityScore must be finite")
            return min(100, max(0, int(round(value))))
        return value

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class TextAnalysisRequest(_CamelModel):
    text: str = Field(min_length=1)


class ImageAnalysisRequest(_CamelModel):
    image_base64: str | None = None
    image_url: str | None = None

    @property
    def image_reference(self) -> str:
        return self.image_base64 or self.image_url or ""


class ErrorResponse(BaseModel):
    error: str
