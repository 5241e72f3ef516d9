"""
MultiLLMService: the inbound contract the HTTP layer calls.

    chat / translate / detect_language  -> one provider call each
    list_models / list_languages / health_check -> static reads

Flow per call: check required fields -> check provider + model -> shape the
request -> dispatch -> estimate usage. Nothing is kept between calls.
"""

from __future__ import annotations

import time
from typing import Dict, Iterable, Optional

import httpx

from multillm.adapters import ProviderDispatcher
from multillm.catalog import ProviderRegistry, media_kind
from multillm.config import Settings
from multillm.errors import ProxyError, ValidationError
from multillm.languages import all_languages, code_for_name
from multillm.logging_setup import get_logger
from multillm.models import DetectionResult, TranslationResult, UniformResponse
from multillm.normalizer import (
    AUTO,
    build_chat_call,
    build_detect_call,
    build_translate_call,
    strip_wrapping_quotes,
)
from multillm.token_utils import UsageEstimator


def _elapsed_ms(t0: float) -> int:
    return max(0, int((time.monotonic() - t0) * 1000))


class MultiLLMService:
    def __init__(
        self,
        registry: ProviderRegistry,
        dispatcher: ProviderDispatcher,
        estimator: UsageEstimator,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.estimator = estimator

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "MultiLLMService":
        registry = ProviderRegistry.from_settings(settings)
        dispatcher = ProviderDispatcher(registry, timeout_s=settings.LLM_TIMEOUT_S, transport=transport)
        return cls(registry, dispatcher, UsageEstimator(registry, tokenizer=settings.TOKENIZER))

    # ---- checks shared by all three call types ----

    def _check_target(self, provider: Optional[str], model: Optional[str], *, text_only: bool = False) -> None:
        if not provider or not model:
            raise ValidationError("Missing required parameters")
        self.dispatcher.validate(provider, model)
        kind = media_kind(model)
        if text_only and kind is not None:
            raise ValidationError(f"Model {model} generates {kind}s and cannot process text requests")

    def _reject(self, exc: ProxyError, **fields) -> ProxyError:
        get_logger().warning("request_rejected", error=exc.message, **fields)
        return exc

    # ---- inbound contract ----

    async def chat(
        self,
        provider: str,
        model: str,
        message: str,
        history: Optional[Iterable] = None,
    ) -> UniformResponse:
        try:
            if not message or not message.strip():
                raise ValidationError("Missing required parameters")
            self._check_target(provider, model)
            call = build_chat_call(provider, model, message, history)
        except ProxyError as e:
            raise self._reject(e, op="chat", provider=provider, model=model)

        t0 = time.monotonic()
        text = await self.dispatcher.dispatch(call)
        elapsed = _elapsed_ms(t0)
        tokens, cost = self.estimator.usage(message, text, model)
        return UniformResponse(
            text=text,
            provider=provider,
            model=model,
            tokens_used=tokens,
            cost_estimate=cost,
            elapsed_ms=elapsed,
        )

    async def translate(
        self,
        provider: str,
        model: str,
        text: str,
        source_lang: Optional[str] = AUTO,
        target_lang: Optional[str] = None,
    ) -> TranslationResult:
        source = (source_lang or AUTO).strip() or AUTO
        try:
            if not text or not text.strip() or not target_lang:
                raise ValidationError("Missing required parameters")
            self._check_target(provider, model, text_only=True)
            call = build_translate_call(provider, model, text, source, target_lang)
        except ProxyError as e:
            raise self._reject(e, op="translate", provider=provider, model=model)

        t0 = time.monotonic()
        raw = await self.dispatcher.dispatch(call)
        translated = strip_wrapping_quotes(raw)
        elapsed = _elapsed_ms(t0)
        tokens, cost = self.estimator.usage(text, translated, model)
        return TranslationResult(
            translated_text=translated,
            source_lang="auto-detected" if source.lower() == AUTO else source,
            target_lang=target_lang,
            provider=provider,
            model=model,
            tokens_used=tokens,
            cost_estimate=cost,
            elapsed_ms=elapsed,
        )

    async def detect_language(self, provider: str, model: str, text: str) -> DetectionResult:
        try:
            if not text or not text.strip():
                raise ValidationError("Missing required parameters")
            self._check_target(provider, model, text_only=True)
            call = build_detect_call(provider, model, text)
        except ProxyError as e:
            raise self._reject(e, op="detect_language", provider=provider, model=model)

        answer = (await self.dispatcher.dispatch(call)).strip()
        code = code_for_name(answer)
        # usage is logged only; detection responses carry no cost
        tokens, cost = self.estimator.usage(text, answer, model)
        get_logger().info(
            "language_detected",
            provider=provider,
            model=model,
            answer=answer,
            code=code,
            tokens_used=tokens,
            cost_estimate=cost,
        )
        return DetectionResult(
            detected_language=answer,
            language_code=code,
            provider=provider,
            model=model,
        )

    def list_models(self) -> Dict[str, Dict[str, str]]:
        return self.registry.list_models()

    def list_languages(self) -> Dict[str, str]:
        return all_languages()

    def health_check(self) -> Dict[str, bool]:
        return self.registry.health()
