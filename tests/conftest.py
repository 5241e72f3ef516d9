"""Pytest configuration and fixtures."""
import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from multillm.adapters import ProviderDispatcher
from multillm.catalog import ProviderRegistry
from multillm.config import Settings
from multillm.service import MultiLLMService

ALL_KEYS = {
    "OPENAI_API_KEY": "sk-test",
    "ANTHROPIC_API_KEY": "sk-ant-test",
    "DEEPSEEK_API_KEY": "ds-test",
    "PERPLEXITY_API_KEY": "pplx-test",
    "AZURE_OPENAI_API_KEY": "az-test",
    "AZURE_OPENAI_ENDPOINT": "https://unit.openai.azure.com/",
    "AZURE_OPENAI_DEPLOYMENT": "",
    "ADOBE_API_KEY": "adobe-client",
    "ADOBE_ACCESS_TOKEN": "adobe-token",
    "CANVA_API_KEY": "canva-test",
}

# One configured model per provider
MODELS = {
    "openai": "gpt-4",
    "anthropic": "claude-3-haiku-20240307",
    "deepseek": "deepseek-chat",
    "perplexity": "sonar",
    "microsoft": "gpt-4o-mini",
    "adobe": "firefly-image",
    "canva": "design",
}


def make_settings(**overrides) -> Settings:
    values = {**ALL_KEYS, **overrides}
    return Settings(_env_file=None, **values)


def chat_completion_body(content: Optional[str]) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [{"index": 0, "finish_reason": "stop", "message": message}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7},
    }


def anthropic_body(text: str) -> Dict[str, Any]:
    return {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-haiku-20240307",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 3, "output_tokens": 4},
    }


DEFAULT_REPLIES: Dict[str, Tuple[int, Any]] = {
    "api.openai.com": (200, chat_completion_body("Hello from OpenAI")),
    "api.anthropic.com": (200, anthropic_body("Hello from Claude")),
    "api.deepseek.com": (200, chat_completion_body("Hello from Deepseek")),
    "api.perplexity.ai": (200, chat_completion_body("Hello from Perplexity")),
    "unit.openai.azure.com": (200, chat_completion_body("Hello from Azure")),
    "firefly-api.adobe.io": (200, {"outputs": [{"seed": 7, "image": {"url": "https://img.example/1.png"}}]}),
    "api.canva.com": (
        200,
        {"design": {"id": "D1", "title": "hello", "urls": {"edit_url": "https://canva.example/edit/D1"}}},
    ),
}


class FakeUpstream:
    """Records every outbound request and answers per host from a reply table."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.replies: Dict[str, Tuple[int, Any]] = dict(DEFAULT_REPLIES)

    def reply(self, host: str, status: int, body: Any) -> None:
        self.replies[host] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        status, body = self.replies[request.url.host]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, (str, bytes)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def registry(settings):
    return ProviderRegistry.from_settings(settings)


@pytest.fixture
def dispatcher(registry, upstream):
    return ProviderDispatcher(registry, timeout_s=5, transport=upstream.transport)


@pytest.fixture
def service(settings, upstream):
    return MultiLLMService.from_settings(settings, transport=upstream.transport)
