"""Fixed system prompts and user-message builders for each content kind."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..models import ContentKind

_RESPONSE_CONTRACT = """Respond with this JSON structure:
{{
  "toxicityScore": <number 0-100>,
  "issues": [
    {{
      "harmType": "<harm-type>",
      "severity": "<severity>",
      "content": "<{excerpt}>",
      "reason": "<short reason for flagging>",
      "explanation": "<child-friendly explanation of why this is concerning, written in a supportive and educational tone>"
    }}
  ],
  "overallSafe": <boolean>,
  "friendlyMessage": "<a brief, encouraging message about the {subject}'s safety>"
}}

If no issues are found, return:
{{
  "toxicityScore": 0,
  "issues": [],
  "overallSafe": true,
  "friendlyMessage": "{safe_message}"
}}"""

_SEVERITY_LEVELS = """Severity Levels:
- "low": Mildly concerning, educational opportunity
- "medium": Moderately harmful, needs attention
- "high": Seriously concerning, requires immediate adult attention"""

_TEXT_CONTRACT = _RESPONSE_CONTRACT.format(
    excerpt="brief excerpt of concerning content",
    subject="content",
    safe_message="This content looks safe and friendly! Great job staying positive online.",
)
_IMAGE_CONTRACT = _RESPONSE_CONTRACT.format(
    excerpt="brief description of concerning element",
    subject="image",
    safe_message="This image looks safe and appropriate! Nice choice.",
)

TEXT_SYSTEM_PROMPT = f"""You are a child-safety content analyzer. Your job is to analyze text for potentially harmful content that could negatively affect children.

IMPORTANT: You must respond ONLY with valid JSON, no markdown, no code blocks, just raw JSON.

Analyze the provided text and identify any concerning content. For each issue found, categorize it as:

Harm Types:
- "hate-speech": Content that attacks or demeans people based on identity
- "abuse": Bullying, harassment, threats, or intimidation
- "self-harm": Content promoting or glorifying self-injury or suicide
- "explicit": Sexual content, extreme violence, or age-inappropriate material

{_SEVERITY_LEVELS}

{_TEXT_CONTRACT}"""

IMAGE_SYSTEM_PROMPT = f"""You are a child-safety image analyzer. Your job is to analyze images for potentially harmful content that could negatively affect children.

IMPORTANT: You must respond ONLY with valid JSON, no markdown, no code blocks, just raw JSON.

Analyze the provided image and identify any concerning content. For each issue found, categorize it as:

Harm Types:
- "hate-speech": Images containing hateful symbols, gestures, or messaging
- "abuse": Images depicting bullying, violence, or harmful behavior
- "self-harm": Images promoting or showing self-injury
- "explicit": Sexual content, graphic violence, or age-inappropriate imagery

{_SEVERITY_LEVELS}

{_IMAGE_CONTRACT}"""


@dataclass(frozen=True, slots=True)
class PromptVariant:
    """Everything that differs between the text and image relays."""

    kind: ContentKind
    system_prompt: str
    build_user_content: Callable[[str], Any]
    fallback_message: str

    def build_messages(self, content: str) -> list[dict[str, Any]]:
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.build_user_content(content)},
        ]


def _text_user_content(text: str) -> str:
    return f"Analyze this text for child safety:\n\n{text}"


def _image_user_content(image_reference: str) -> list[dict[str, Any]]:
    return [
        {"type": "text", "text": "Analyze this image for child safety:"},
        {"type": "image_url", "image_url": {"url": image_reference}},
    ]


TEXT_VARIANT = PromptVariant(
    kind=ContentKind.TEXT,
    system_prompt=TEXT_SYSTEM_PROMPT,
    build_user_content=_text_user_content,
    fallback_message=(
        "We analyzed the content but couldn't determine specific issues. "
        "The content may be safe."
    ),
)

IMAGE_VARIANT = PromptVariant(
    kind=ContentKind.IMAGE,
    system_prompt=IMAGE_SYSTEM_PROMPT,
    build_user_content=_image_user_content,
    fallback_message=(
        "We analyzed the image but couldn't determine specific issues. "
        "The image may be safe."
    ),
)

VARIANTS: dict[ContentKind, PromptVariant] = {
    ContentKind.TEXT: TEXT_VARIANT,
    ContentKind.IMAGE: IMAGE_VARIANT,
}
