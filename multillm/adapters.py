"""
Adapter registry + dispatcher.

One adapter per provider id. Every adapter has the same two capabilities:
  send(call, creds, timeout_s=..., transport=...) -> raw provider response
  extract(raw) -> text, or None when the expected field is missing
so provider quirks (auth header, endpoint, envelope) stay inside the adapter.
"""

from __future__ import annotations

import time
from typing import Optional

import httpx

from multillm.catalog import ProviderRegistry
from multillm.errors import ProviderCallError, UnavailableProviderError, UnknownModelError
from multillm.logging_setup import get_logger
from multillm.models import ProviderCall
from multillm.observability import PROVIDER_CALLS
from multillm.providers.adobe_provider import AdobeFireflyAdapter
from multillm.providers.anthropic_provider import AnthropicAdapter
from multillm.providers.azure_provider import AzureOpenAIAdapter
from multillm.providers.canva_provider import CanvaAdapter
from multillm.providers.deepseek_provider import DeepseekAdapter
from multillm.providers.openai_provider import OpenAIAdapter
from multillm.providers.perplexity_provider import PerplexityAdapter


class LLMAdapterRegistry:
    # Keys are the provider ids used in config/models.yaml and on the wire.
    _registry = {
        "openai": OpenAIAdapter(),
        "anthropic": AnthropicAdapter(),
        "deepseek": DeepseekAdapter(),
        "perplexity": PerplexityAdapter(),
        "microsoft": AzureOpenAIAdapter(),
        "adobe": AdobeFireflyAdapter(),
        "canva": CanvaAdapter(),
    }

    @classmethod
    def get(cls, provider: str):
        if provider not in cls._registry:
            raise ValueError(f"Unknown provider '{provider}'")
        return cls._registry[provider]


class ProviderDispatcher:
    def __init__(
        self,
        registry: ProviderRegistry,
        timeout_s: float = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.registry = registry
        self.timeout_s = timeout_s
        # Shared by every adapter (SDK ones too); lets tests swap the network out
        self.transport = transport

    def validate(self, provider: str, model: str) -> None:
        if not self.registry.is_available(provider):
            raise UnavailableProviderError(provider)
        if not self.registry.has_model(provider, model):
            raise UnknownModelError(provider, model)

    async def dispatch(self, call: ProviderCall) -> str:
        """Run the call and return the provider's text (or its placeholder)."""
        self.validate(call.provider, call.model)
        adapter = LLMAdapterRegistry.get(call.provider)
        log = get_logger().bind(provider=call.provider, model=call.model, kind=call.kind)

        t0 = time.monotonic()
        try:
            raw = await adapter.send(
                call,
                self.registry.credentials(call.provider),
                timeout_s=self.timeout_s,
                transport=self.transport,
            )
        except ProviderCallError as e:
            PROVIDER_CALLS.labels(provider=call.provider, outcome="error").inc()
            log.error("provider_call_failed", error=e.message, upstream_status=e.upstream_status)
            raise

        text = adapter.extract(raw)
        if text is None:
            PROVIDER_CALLS.labels(provider=call.provider, outcome="placeholder").inc()
            log.warning("provider_response_missing_text")
            text = adapter.placeholder
        else:
            PROVIDER_CALLS.labels(provider=call.provider, outcome="ok").inc()

        log.info("provider_call_ok", latency_ms=int((time.monotonic() - t0) * 1000))
        return text
