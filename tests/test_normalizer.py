"""Tests for request shaping."""
import pytest

from multillm.errors import ValidationError
from multillm.models import ChatTurn
from multillm.normalizer import (
    HISTORY_LIMIT,
    build_chat_call,
    build_detect_call,
    build_translate_call,
    strip_wrapping_quotes,
    translation_prompt,
)


def _history(n):
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"turn {i}"}
        for i in range(n)
    ]


@pytest.mark.parametrize("provider", ["openai", "anthropic", "deepseek", "perplexity", "microsoft"])
def test_history_truncated_to_last_ten_plus_new_turn(provider):
    call = build_chat_call(provider, "m", "newest", _history(15))
    assert len(call.messages) == HISTORY_LIMIT + 1 == 11
    assert [t.content for t in call.messages[:-1]] == [f"turn {i}" for i in range(5, 15)]
    assert call.messages[-1] == ChatTurn(role="user", content="newest")


def test_short_history_kept_in_order():
    call = build_chat_call("openai", "gpt-4", "hi", _history(3))
    assert [t.content for t in call.messages] == ["turn 0", "turn 1", "turn 2", "hi"]


def test_system_turns_dropped_for_anthropic_only():
    history = [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "q"},
        {"role": "assistant", "content": "a"},
    ]
    anthropic = build_chat_call("anthropic", "claude-3-haiku-20240307", "next", history)
    assert [t.role for t in anthropic.messages] == ["user", "assistant", "user"]

    openai = build_chat_call("openai", "gpt-4", "next", history)
    assert [t.role for t in openai.messages] == ["system", "user", "assistant", "user"]


def test_chat_sampling_is_fixed():
    call = build_chat_call("openai", "gpt-4", "hi")
    assert (call.kind, call.temperature, call.max_tokens) == ("chat", 0.7, 4000)


def test_chat_rejects_blank_message():
    with pytest.raises(ValidationError):
        build_chat_call("openai", "gpt-4", "   ")


def test_chat_rejects_unknown_role():
    with pytest.raises(ValidationError, match="role"):
        build_chat_call("openai", "gpt-4", "hi", [{"role": "tool", "content": "x"}])


def test_translate_auto_names_only_the_target():
    call = build_translate_call("openai", "gpt-4", "Hola mundo", "auto", "en")
    prompt = call.messages[0].content
    assert len(call.messages) == 1 and call.messages[0].role == "user"
    assert "to English" in prompt
    assert " from " not in prompt
    assert "Spanish" not in prompt
    assert '"Hola mundo"' in prompt
    assert (call.kind, call.temperature, call.max_tokens) == ("translate", 0.3, 2000)


def test_translate_names_both_languages():
    call = build_translate_call("openai", "gpt-4", "Bonjour", "fr", "de")
    assert call.messages[0].content == (
        "Translate the following text from French to German. "
        'Only provide the translation, no explanations:\n\n"Bonjour"'
    )


def test_translate_missing_source_means_auto():
    call = build_translate_call("openai", "gpt-4", "hi", None, "ja")
    assert call.messages[0].content.startswith("Translate the following text to Japanese.")


def test_translate_unknown_target_used_literally():
    assert translation_prompt("hi", None, "Esperanto").startswith("Translate the following text to Esperanto.")
    call = build_translate_call("openai", "gpt-4", "hi", "auto", "Esperanto")
    assert "to Esperanto" in call.messages[0].content


def test_translate_same_language_rejected():
    with pytest.raises(ValidationError, match="differ"):
        build_translate_call("openai", "gpt-4", "hi", "en", "en")


def test_translate_unknown_source_used_literally():
    call = build_translate_call("openai", "gpt-4", "Olá", "pt-BR", "en")
    assert call.messages[0].content.startswith("Translate the following text from pt-BR to English.")


@pytest.mark.parametrize("source", ["AUTO", "Auto", " auto "])
def test_translate_auto_is_case_insensitive(source):
    call = build_translate_call("openai", "gpt-4", "Hola", source, "en")
    assert call.messages[0].content.startswith("Translate the following text to English.")


def test_translate_same_language_ignores_case():
    with pytest.raises(ValidationError, match="differ"):
        build_translate_call("openai", "gpt-4", "hi", "FR", "fr")


@pytest.mark.parametrize("text,target", [("", "en"), ("  ", "en"), ("hi", None), ("hi", "")])
def test_translate_missing_fields(text, target):
    with pytest.raises(ValidationError):
        build_translate_call("openai", "gpt-4", text, "auto", target)


def test_detect_call_shape():
    call = build_detect_call("deepseek", "deepseek-chat", "Guten Tag")
    prompt = call.messages[0].content
    assert "only the language name in English" in prompt
    assert prompt.endswith('"Guten Tag"')
    assert (call.kind, call.temperature, call.max_tokens) == ("detect", 0.1, 50)


def test_prompt_property_is_last_user_turn():
    call = build_chat_call("adobe", "firefly-image", "a red fox", _history(2))
    assert call.prompt == "a red fox"


@pytest.mark.parametrize(
    "raw,clean",
    [('"Hello"', "Hello"), ("'Hello'", "Hello"), ("  Hello \n", "Hello"), ('say "hi"', 'say "hi'), ("", "")],
)
def test_strip_wrapping_quotes(raw, clean):
    assert strip_wrapping_quotes(raw) == clean
