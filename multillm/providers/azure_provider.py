"""
Azure OpenAI chat completions over raw HTTPS.

The URL is built from the configured resource endpoint and deployment name:
  {endpoint}/openai/deployments/{deployment}/chat/completions?api-version=...
Auth is the "api-key" header, not a bearer token. The deployment picks the
model, so the body carries no "model" field.
"""

from typing import Any, Dict

from multillm.models import ProviderCall
from multillm.providers.chat_completions import ChatCompletionsAdapter


class AzureOpenAIAdapter(ChatCompletionsAdapter):
    PROVIDER = "microsoft"
    LABEL = "Azure"

    def url(self, call: ProviderCall, creds: Dict[str, str]) -> str:
        endpoint = creds["endpoint"].rstrip("/")
        # No deployment configured: assume it was named after the model
        deployment = creds.get("deployment") or call.model
        version = creds.get("api_version") or "2024-02-15-preview"
        return f"{endpoint}/openai/deployments/{deployment}/chat/completions?api-version={version}"

    def headers(self, creds: Dict[str, str]) -> Dict[str, str]:
        return {"api-key": creds["api_key"], "Content-Type": "application/json"}

    def payload(self, call: ProviderCall) -> Dict[str, Any]:
        return {
            "messages": call.message_dicts(),
            "temperature": call.temperature,
            "max_tokens": call.max_tokens,
        }
