# multillm/models.py
"""
Value shapes passed between the normalizer, dispatcher and service.

All of them are frozen dataclasses: built once per call, never mutated,
never persisted (history storage belongs to whoever calls us).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple

PROVIDER_IDS: Tuple[str, ...] = (
    "openai",
    "anthropic",
    "deepseek",
    "perplexity",
    "microsoft",
    "adobe",
    "canva",
)

ROLES = ("user", "assistant", "system")


@dataclass(frozen=True)
class ChatTurn:
    role: str
    content: str

    def as_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ModelCatalogEntry:
    provider: str
    model_id: str
    display_name: str
    cost_per_token: float | None = None


@dataclass(frozen=True)
class ProviderCall:
    """Provider-ready request: ordered turns plus the fixed sampling settings for its kind."""

    provider: str
    model: str
    messages: Tuple[ChatTurn, ...]
    temperature: float
    max_tokens: int
    kind: str = "chat"

    @property
    def prompt(self) -> str:
        """Content of the newest user turn (media providers take a single prompt)."""
        for turn in reversed(self.messages):
            if turn.role == "user":
                return turn.content
        return ""

    def message_dicts(self) -> list[dict]:
        return [t.as_dict() for t in self.messages]


def utc_timestamp() -> str:
    # 2024-05-01T12:00:00.123Z, the shape browsers produce with toISOString()
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class UniformResponse:
    text: str
    provider: str
    model: str
    tokens_used: int
    cost_estimate: float
    elapsed_ms: int
    timestamp: str = field(default_factory=utc_timestamp)


@dataclass(frozen=True)
class TranslationResult:
    translated_text: str
    source_lang: str
    target_lang: str
    provider: str
    model: str
    tokens_used: int
    cost_estimate: float
    elapsed_ms: int
    timestamp: str = field(default_factory=utc_timestamp)


@dataclass(frozen=True)
class DetectionResult:
    detected_language: str
    language_code: str
    provider: str
    model: str
    timestamp: str = field(default_factory=utc_timestamp)
