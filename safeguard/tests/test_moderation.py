"""Tests for the keyword moderation engine."""

from ..models import HarmType, Severity
from ..policies.moderation import ModerationEngine


def test_moderation_engine_flags_hateful_words() -> None:
    """Text mentioning hate should yield a medium hate-speech issue."""
    engine = ModerationEngine()
    result = engine.evaluate_text("I hate Mondays")

    assert not result.overall_safe
    assert len(result.issues) == 1
    issue = result.issues[0]
    assert issue.harm_type == HarmType.HATE_SPEECH
    assert issue.severity == Severity.MEDIUM
    assert issue.content == "I hate Mondays"
    assert result.toxicity_score == 15


def test_moderation_engine_combines_rules() -> None:
    engine = ModerationEngine()
    result = engine.evaluate_text("That was stupid and it could hurt someone. " * 5)

    assert [issue.harm_type for issue in result.issues] == [
        HarmType.HATE_SPEECH,
        HarmType.SELF_HARM,
    ]
    assert all(len(issue.content) == 100 for issue in result.issues)
    assert result.toxicity_score == 45


def test_moderation_engine_allows_clean_content() -> None:
    """Friendly text and any image should pass."""
    engine = ModerationEngine()

    text_result = engine.evaluate_text("What a lovely sunny day")
    image_result = engine.evaluate_image("https://example.com/cat.png")

    assert text_result.overall_safe
    assert text_result.issues == []
    assert text_result.toxicity_score == 0
    assert image_result.overall_safe
