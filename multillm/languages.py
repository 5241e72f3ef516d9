"""Static language directory: code -> English name, and the reverse lookup for detection answers."""

from __future__ import annotations

from typing import Dict

UNKNOWN = "unknown"

LANGUAGES: Dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese (Simplified)",
    "zh-tw": "Chinese (Traditional)",
    "ar": "Arabic",
    "hi": "Hindi",
    "nl": "Dutch",
    "sv": "Swedish",
    "da": "Danish",
    "no": "Norwegian",
    "fi": "Finnish",
    "pl": "Polish",
    "tr": "Turkish",
    "th": "Thai",
    "vi": "Vietnamese",
    "id": "Indonesian",
    "ms": "Malay",
    "tl": "Filipino",
    "he": "Hebrew",
    "fa": "Persian",
    "ur": "Urdu",
    "bn": "Bengali",
    "gu": "Gujarati",
    "ta": "Tamil",
    "te": "Telugu",
    "kn": "Kannada",
    "ml": "Malayalam",
    "mr": "Marathi",
    "pa": "Punjabi",
}

_NAME_TO_CODE: Dict[str, str] = {name.lower(): code for code, name in LANGUAGES.items()}


def language_name(code: str | None) -> str | None:
    if not code:
        return None
    return LANGUAGES.get(code.lower())


def code_for_name(name: str | None) -> str:
    """Map a model's free-text answer ("spanish", '"Spanish".') to a code, or 'unknown'."""
    if not name:
        return UNKNOWN
    norm = name.strip().strip("\"'").strip().rstrip(".").strip().lower()
    return _NAME_TO_CODE.get(norm, UNKNOWN)


def all_languages() -> Dict[str, str]:
    return dict(LANGUAGES)


__all__ = ["LANGUAGES", "UNKNOWN", "language_name", "code_for_name", "all_languages"]
