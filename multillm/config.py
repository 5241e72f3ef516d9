"""
Centralized settings using Pydantic Settings (v2).
Provider credentials come from the environment (or .env) so nothing secret is hard-coded.
A provider counts as "available" only when its credentials are present here at startup.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

# Repo root: multillm/config.py -> multillm -> <root>
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CATALOG_PATH = PROJECT_ROOT / "config" / "models.yaml"


class Settings(BaseSettings):
    # ---- LLM / AI providers ----
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None
    DEEPSEEK_API_KEY: str | None = None
    PERPLEXITY_API_KEY: str | None = None

    # Azure OpenAI needs key AND endpoint; deployment falls back to the model id
    AZURE_OPENAI_API_KEY: str | None = None
    AZURE_OPENAI_ENDPOINT: str | None = None
    AZURE_OPENAI_DEPLOYMENT: str = Field(default="")
    AZURE_OPENAI_API_VERSION: str = Field(default="2024-02-15-preview")

    # Adobe Firefly: client id goes in x-api-key, the optional IMS token as bearer
    ADOBE_API_KEY: str | None = None
    ADOBE_ACCESS_TOKEN: str | None = None
    CANVA_API_KEY: str | None = None

    # ---- Catalog / calls ----
    MODEL_CATALOG_PATH: str = Field(
        default=str(DEFAULT_CATALOG_PATH),
        description="YAML file with providers, models, display names and cost per token",
    )
    LLM_TIMEOUT_S: int = 60
    TOKENIZER: str = Field(default="heuristic", description="'heuristic' (chars/4) or 'tiktoken'")

    # ---- Observability ----
    SERVICE_NAME: str = Field(default="multillm-proxy")
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
