"""
Adobe Firefly image generation (v3) over raw HTTPS.
Docs: https://developer.adobe.com/firefly-services/docs/firefly-api/

Firefly takes one prompt, not a conversation, so we send the newest user turn.
The "text" we hand back is a pointer to the generated image.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from multillm.models import ProviderCall
from multillm.providers.chat_completions import post_json


class AdobeFireflyAdapter:
    PROVIDER = "adobe"
    LABEL = "Adobe"
    BASE_URL = "https://firefly-api.adobe.io/v3/images/generate"

    @property
    def placeholder(self) -> str:
        return f"{self.LABEL} response unavailable"

    def headers(self, creds: Dict[str, str]) -> Dict[str, str]:
        headers = {
            "x-api-key": creds["api_key"],
            "Content-Type": "application/json",
        }
        if creds.get("access_token"):
            headers["Authorization"] = f"Bearer {creds['access_token']}"
        return headers

    async def send(
        self,
        call: ProviderCall,
        creds: Dict[str, str],
        *,
        timeout_s: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Any:
        data = {"prompt": call.prompt, "numVariations": 1}
        return await post_json(
            self.PROVIDER, self.LABEL, self.BASE_URL, self.headers(creds), data, timeout_s, transport
        )

    def extract(self, body: Any) -> Optional[str]:
        # {"outputs": [{"seed": 1, "image": {"url": "https://..."}}]}
        outputs = body.get("outputs") if isinstance(body, dict) else None
        if not outputs or not isinstance(outputs[0], dict):
            return None
        url = (outputs[0].get("image") or {}).get("url")
        return f"Generated image: {url}" if url else None
