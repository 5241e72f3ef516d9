"""
Deepseek Chat Completions API (OpenAI-compatible, bearer auth).
Docs: https://api-docs.deepseek.com/api/create-chat-completion
"""

from multillm.providers.chat_completions import ChatCompletionsAdapter


class DeepseekAdapter(ChatCompletionsAdapter):
    PROVIDER = "deepseek"
    LABEL = "Deepseek"
    BASE_URL = "https://api.deepseek.com/chat/completions"
