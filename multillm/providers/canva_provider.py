"""
Canva Connect API: create a design from the prompt.
Docs: https://www.canva.dev/docs/connect/api-reference/designs/create-design/
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from multillm.models import ProviderCall
from multillm.providers.chat_completions import post_json

# Canva rejects titles longer than this
MAX_TITLE_CHARS = 255


class CanvaAdapter:
    PROVIDER = "canva"
    LABEL = "Canva"
    BASE_URL = "https://api.canva.com/rest/v1/designs"

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
        headers = {
            "Authorization": f"Bearer {creds['api_key']}",
            "Content-Type": "application/json",
        }
        data = {
            "design_type": {"type": "preset", "name": "doc"},
            "title": call.prompt.strip()[:MAX_TITLE_CHARS],
        }
        return await post_json(self.PROVIDER, self.LABEL, self.BASE_URL, headers, data, timeout_s, transport)

    def extract(self, body: Any) -> Optional[str]:
        design = body.get("design") if isinstance(body, dict) else None
        if not isinstance(design, dict):
            return None
        url = (design.get("urls") or {}).get("edit_url")
        return f"Created design: {url}" if url else None
