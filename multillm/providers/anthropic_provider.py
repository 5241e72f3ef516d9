"""
Anthropic Messages API, via the official async SDK.
Docs: https://docs.anthropic.com/en/api/messages

System turns are already filtered out by the normalizer (the messages array
only takes user/assistant here); we send what we get.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from anthropic import AnthropicError, APIStatusError, AsyncAnthropic

from multillm.errors import ProviderCallError
from multillm.models import ProviderCall


class AnthropicAdapter:
    PROVIDER = "anthropic"
    LABEL = "Anthropic"

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
        client = AsyncAnthropic(**kwargs)
        try:
            return await client.messages.create(
                model=call.model,
                max_tokens=call.max_tokens,
                temperature=call.temperature,
                messages=call.message_dicts(),
            )
        except APIStatusError as e:
            raise ProviderCallError(
                f"Anthropic API error ({e.status_code}): {e.message}",
                provider=self.PROVIDER,
                upstream_status=e.status_code,
            ) from e
        except AnthropicError as e:
            raise ProviderCallError(f"Anthropic request failed: {e}", provider=self.PROVIDER) from e
        finally:
            await client.close()

    def extract(self, message: Any) -> Optional[str]:
        # First text block wins; tool_use and other block types carry no text
        for blk in getattr(message, "content", None) or []:
            if getattr(blk, "type", None) == "text":
                text = getattr(blk, "text", None)
                return text if isinstance(text, str) and text.strip() else None
        return None
