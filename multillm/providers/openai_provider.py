# multillm/providers/openai_provider.py
"""
OpenAI provider adapter, via the official async SDK.

NOTES:
- The history goes through unchanged: the chat completions API accepts
  system/user/assistant turns in any position.
- max_retries=0: a failed call is reported once, never retried here.
- Pass an httpx transport to route the SDK through a test double.

Official docs: https://platform.openai.com/docs/api-reference/chat/create
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from openai import APIStatusError, AsyncOpenAI, OpenAIError

from multillm.errors import ProviderCallError
from multillm.models import ProviderCall


class OpenAIAdapter:
    PROVIDER = "openai"
    LABEL = "OpenAI"

    @property
    def placeholder(self) -> str:
        return f"{self.LABEL} response unavailable"

    async def send(
        self,
        call: ProviderCall,
        creds: Dict[str, str],
        *,
        timeout_s: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Any:
        kwargs: Dict[str, Any] = {"api_key": creds["api_key"], "timeout": timeout_s, "max_retries": 0}
        if transport is not None:
            kwargs["http_client"] = httpx.AsyncClient(transport=transport)
        client = AsyncOpenAI(**kwargs)
        try:
            return await client.chat.completions.create(
                model=call.model,
                messages=call.message_dicts(),
                temperature=call.temperature,
                max_tokens=call.max_tokens,
            )
        except APIStatusError as e:
            raise ProviderCallError(
                f"OpenAI API error ({e.status_code}): {e.message}",
                provider=self.PROVIDER,
                upstream_status=e.status_code,
            ) from e
        except OpenAIError as e:
            raise ProviderCallError(f"OpenAI request failed: {e}", provider=self.PROVIDER) from e
        finally:
            await client.close()

    def extract(self, completion: Any) -> Optional[str]:
        choices = getattr(completion, "choices", None) or []
        if not choices:
            return None
        msg = getattr(choices[0], "message", None)
        content = getattr(msg, "content", None)
        return content if isinstance(content, str) and content.strip() else None
