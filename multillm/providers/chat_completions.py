"""
Shared pieces for providers we call over raw HTTPS (no SDK).

- post_json(): one POST via httpx, turning network errors, non-2xx statuses and
  non-JSON bodies into ProviderCallError.
- ChatCompletionsAdapter: the OpenAI-style "chat/completions" shape that Deepseek,
  Perplexity and Azure OpenAI all speak. Subclasses override url/headers/payload.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from multillm.errors import ProviderCallError
from multillm.models import ProviderCall


async def post_json(
    provider: str,
    label: str,
    url: str,
    headers: Dict[str, str],
    data: Dict[str, Any],
    timeout_s: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    try:
        async with httpx.AsyncClient(timeout=timeout_s, transport=transport) as client:
            resp = await client.post(url, headers=headers, json=data)
    except httpx.HTTPError as e:
        raise ProviderCallError(f"{label} request failed: {e}", provider=provider) from e

    if resp.is_error:
        raise ProviderCallError(
            f"{label} API error ({resp.status_code}): {resp.text}",
            provider=provider,
            upstream_status=resp.status_code,
        )
    try:
        return resp.json()
    except ValueError as e:
        raise ProviderCallError(
            f"{label} returned a non-JSON response",
            provider=provider,
            upstream_status=resp.status_code,
        ) from e


def first_choice_content(body: Any) -> Optional[str]:
    """choices[0].message.content, or None when any step of the path is missing."""
    if not isinstance(body, dict):
        return None
    choices = body.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return None
    msg = choices[0].get("message") or {}
    content = msg.get("content") if isinstance(msg, dict) else None
    return content if isinstance(content, str) and content.strip() else None


class ChatCompletionsAdapter:
    PROVIDER = ""
    LABEL = ""
    BASE_URL = ""

    @property
    def placeholder(self) -> str:
        return f"{self.LABEL} response unavailable"

    def url(self, call: ProviderCall, creds: Dict[str, str]) -> str:
        return self.BASE_URL

    def headers(self, creds: Dict[str, str]) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {creds['api_key']}",
            "Content-Type": "application/json",
        }

    def payload(self, call: ProviderCall) -> Dict[str, Any]:
        return {
            "model": call.model,
            "messages": call.message_dicts(),
            "temperature": call.temperature,
            "max_tokens": call.max_tokens,
        }

    async def send(
        self,
        call: ProviderCall,
        creds: Dict[str, str],
        *,
        timeout_s: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Any:
        return await post_json(
            self.PROVIDER,
            self.LABEL,
            self.url(call, creds),
            self.headers(creds),
            self.payload(call),
            timeout_s,
            transport,
        )

    def extract(self, body: Any) -> Optional[str]:
        return first_choice_content(body)
