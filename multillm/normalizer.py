"""
Request shaping: uniform chat / translate / detect inputs -> ProviderCall.

Translation and language detection are not separate wire protocols; they are
one-turn chat calls carrying an instruction. Sampling settings are fixed per
call kind and never taken from the caller.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence, Tuple

from multillm.errors import ValidationError
from multillm.languages import language_name
from multillm.models import ROLES, ChatTurn, ProviderCall

HISTORY_LIMIT = 10
AUTO = "auto"

# kind -> (temperature, max_tokens)
SAMPLING: Dict[str, Tuple[float, int]] = {
    "chat": (0.7, 4000),
    "translate": (0.3, 2000),
    "detect": (0.1, 50),
}

# Providers whose API rejects system turns in the messages array
_NO_SYSTEM_TURNS = {"anthropic"}


def _require(value: Optional[str], what: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Missing required parameter: {what}")
    return str(value)


def coerce_history(history: Optional[Iterable]) -> Tuple[ChatTurn, ...]:
    """Accept ChatTurn objects or {role, content} dicts; reject unknown roles."""
    turns = []
    for item in history or ():
        if isinstance(item, ChatTurn):
            turn = item
        else:
            turn = ChatTurn(role=str(item.get("role", "")), content=str(item.get("content") or ""))
        if turn.role not in ROLES:
            raise ValidationError(f"Invalid history role: {turn.role!r}")
        turns.append(turn)
    return tuple(turns)


def shape_chat_turns(provider: str, message: str, history: Sequence[ChatTurn]) -> Tuple[ChatTurn, ...]:
    kept = list(history)[-HISTORY_LIMIT:]
    if provider in _NO_SYSTEM_TURNS:
        kept = [t for t in kept if t.role != "system"]
    return tuple(kept) + (ChatTurn(role="user", content=message),)


def _call(provider: str, model: str, kind: str, messages: Tuple[ChatTurn, ...]) -> ProviderCall:
    temperature, max_tokens = SAMPLING[kind]
    return ProviderCall(
        provider=provider,
        model=model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
        kind=kind,
    )


def build_chat_call(provider: str, model: str, message: str, history: Optional[Iterable] = None) -> ProviderCall:
    message = _require(message, "message")
    turns = shape_chat_turns(provider, message, coerce_history(history))
    return _call(provider, model, "chat", turns)


def resolve_translation_languages(source_lang: Optional[str], target_lang: Optional[str]) -> Tuple[Optional[str], str]:
    """
    Validate the language pair and return (source_name, target_name).
    source_name is None for auto-detect; unknown codes are used literally.
    """
    target_lang = _require(target_lang, "targetLang").strip()
    source = (source_lang or AUTO).strip() or AUTO

    if source.lower() != AUTO:
        if source.lower() == target_lang.lower():
            raise ValidationError("Source and target languages must differ")
        source_name = language_name(source) or source
    else:
        source_name = None

    return source_name, language_name(target_lang) or target_lang


def translation_prompt(text: str, source_name: Optional[str], target_name: str) -> str:
    if source_name is None:
        head = f"Translate the following text to {target_name}."
    else:
        head = f"Translate the following text from {source_name} to {target_name}."
    return f'{head} Only provide the translation, no explanations:\n\n"{text}"'


def build_translate_call(
    provider: str,
    model: str,
    text: str,
    source_lang: Optional[str],
    target_lang: Optional[str],
) -> ProviderCall:
    text = _require(text, "text")
    source_name, target_name = resolve_translation_languages(source_lang, target_lang)
    prompt = translation_prompt(text, source_name, target_name)
    return _call(provider, model, "translate", (ChatTurn(role="user", content=prompt),))


def detection_prompt(text: str) -> str:
    return (
        "Detect the language of the following text and respond with only the language name "
        f'in English (e.g., "English", "Spanish", "French", etc.):\n\n"{text}"'
    )


def build_detect_call(provider: str, model: str, text: str) -> ProviderCall:
    text = _require(text, "text")
    return _call(provider, model, "detect", (ChatTurn(role="user", content=detection_prompt(text)),))


def strip_wrapping_quotes(text: str) -> str:
    """Drop one leading and one trailing quote that models like to echo back."""
    out = (text or "").strip()
    if out[:1] in ("\"", "'"):
        out = out[1:]
    if out[-1:] in ("\"", "'"):
        out = out[:-1]
    return out
