"""Keyword-based moderation used when no AI gateway is wired in."""
from __future__ import annotations

from dataclasses import dataclass

from ..models import HarmType, Severity
from ..schemas.analysis import ModerationIssue, ModerationVerdict
from ..services.display import aggregate_severity_score, derive_tier

EXCERPT_LENGTH = 100


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Flag content containing any of ``keywords``."""

    keywords: tuple[str, ...]
    harm_type: HarmType
    severity: Severity
    reason: str
    explanation: str


DEFAULT_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        keywords=("hate", "stupid"),
        harm_type=HarmType.HATE_SPEECH,
        severity=Severity.MEDIUM,
        reason="Contains potentially harmful language",
        explanation=(
            "This content was flagged because it uses words that can hurt or upset "
            "people. Using kind words helps everyone feel welcome and respected online."
        ),
    ),
    KeywordRule(
        keywords=("hurt", "harm"),
        harm_type=HarmType.SELF_HARM,
        severity=Severity.HIGH,
        reason="Contains concerning themes",
        explanation=(
            "This content mentions topics that could be concerning. If you or someone "
            "you know is struggling, please talk to a trusted adult or reach out for help."
        ),
    ),
)


class ModerationEngine:
    """Rule-based moderation for demos and offline development."""

    def __init__(self, rules: tuple[KeywordRule, ...] = DEFAULT_RULES) -> None:
        self.rules = rules

    def evaluate_text(self, text: str) -> ModerationVerdict:
        """Check text against the keyword rules."""
        lowered = text.lower()
        issues = [
            ModerationIssue(
                harm_type=rule.harm_type,
                severity=rule.severity,
                content=text[:EXCERPT_LENGTH],
                reason=rule.reason,
                explanation=rule.explanation,
            )
            for rule in self.rules
            if any(keyword in lowered for keyword in rule.keywords)
        ]
        return self._verdict(issues)

    def evaluate_image(self, image_reference: str) -> ModerationVerdict:  # noqa: ARG002
        """Images are never flagged by the keyword rules."""
        return self._verdict([])

    @staticmethod
    def _verdict(issues: list[ModerationIssue]) -> ModerationVerdict:
        score = aggregate_severity_score(issue.severity for issue in issues)
        return ModerationVerdict(
            toxicity_score=score,
            issues=issues,
            overall_safe=not issues,
            friendly_message=derive_tier(score).message,
        )
