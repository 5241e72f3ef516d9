"""
Perplexity Chat Completions API (OpenAI-compatible, bearer auth).
Docs: https://docs.perplexity.ai/api-reference/chat-completions
"""

from multillm.providers.chat_completions import ChatCompletionsAdapter


class PerplexityAdapter(ChatCompletionsAdapter):
    PROVIDER = "perplexity"
    LABEL = "Perplexity"
    BASE_URL = "https://api.perplexity.ai/chat/completions"
