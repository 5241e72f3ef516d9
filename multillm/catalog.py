"""
Provider registry: who is usable, which models they offer, what a token costs.

We load a catalog YAML with this shape:

default_cost_per_token: 0.000002
providers:
  openai:
    models:
      - model: gpt-4
        name: GPT-4
        cost_per_token: 0.00003
  ...

Credentials come from Settings. Both are read once at startup; afterwards the
registry is read-only and safe to share between concurrent requests.
"""

from typing import Any, Dict, List, Mapping, Optional
import yaml

from multillm.config import Settings
from multillm.logging_setup import get_logger
from multillm.models import PROVIDER_IDS, ModelCatalogEntry

# Used when a model has no listed price. Unusual or brand-new model ids still get a
# cost figure instead of an error, at the price of a less accurate estimate.
DEFAULT_COST_PER_TOKEN = 0.000002

# Substrings in a model id that mark it as a media (non-text) model
_IMAGE_MARKERS = ("image", "firefly")
_DESIGN_MARKERS = ("design",)


def load_catalog(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"Model catalog {path} must be a mapping with a 'providers' key")
    return doc


def _parse_entries(doc: Mapping[str, Any]) -> List[ModelCatalogEntry]:
    entries: List[ModelCatalogEntry] = []
    providers = doc.get("providers") or {}
    for provider, block in providers.items():
        if provider not in PROVIDER_IDS:
            raise ValueError(f"Unknown provider '{provider}' in model catalog")
        for row in (block or {}).get("models") or []:
            cost = row.get("cost_per_token")
            entries.append(
                ModelCatalogEntry(
                    provider=provider,
                    model_id=str(row["model"]),
                    display_name=str(row.get("name") or row["model"]),
                    cost_per_token=float(cost) if cost is not None else None,
                )
            )
    return entries


def credentials_from_settings(settings: Settings) -> Dict[str, Optional[Dict[str, str]]]:
    """Per-provider credential bundle, or None when the provider is not configured."""

    def _one(key: Optional[str]) -> Optional[Dict[str, str]]:
        return {"api_key": key} if key else None

    azure = None
    if settings.AZURE_OPENAI_API_KEY and settings.AZURE_OPENAI_ENDPOINT:
        azure = {
            "api_key": settings.AZURE_OPENAI_API_KEY,
            "endpoint": settings.AZURE_OPENAI_ENDPOINT,
            "deployment": settings.AZURE_OPENAI_DEPLOYMENT or "",
            "api_version": settings.AZURE_OPENAI_API_VERSION,
        }

    adobe = None
    if settings.ADOBE_API_KEY:
        adobe = {"api_key": settings.ADOBE_API_KEY, "access_token": settings.ADOBE_ACCESS_TOKEN or ""}

    return {
        "openai": _one(settings.OPENAI_API_KEY),
        "anthropic": _one(settings.ANTHROPIC_API_KEY),
        "deepseek": _one(settings.DEEPSEEK_API_KEY),
        "perplexity": _one(settings.PERPLEXITY_API_KEY),
        "microsoft": azure,
        "adobe": adobe,
        "canva": _one(settings.CANVA_API_KEY),
    }


class ProviderRegistry:
    def __init__(
        self,
        entries: List[ModelCatalogEntry],
        credentials: Mapping[str, Optional[Dict[str, str]]],
        default_cost_per_token: float = DEFAULT_COST_PER_TOKEN,
    ):
        self._credentials = {p: credentials.get(p) for p in PROVIDER_IDS}
        self._default_cost = float(default_cost_per_token)
        self._catalog: Dict[str, Dict[str, ModelCatalogEntry]] = {p: {} for p in PROVIDER_IDS}
        for e in entries:
            self._catalog[e.provider][e.model_id] = e

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderRegistry":
        doc = load_catalog(settings.MODEL_CATALOG_PATH)
        entries = _parse_entries(doc)
        registry = cls(
            entries,
            credentials_from_settings(settings),
            default_cost_per_token=doc.get("default_cost_per_token", DEFAULT_COST_PER_TOKEN),
        )
        get_logger().info(
            "catalog_loaded",
            path=settings.MODEL_CATALOG_PATH,
            models=len(entries),
            available=[p for p in PROVIDER_IDS if registry.is_available(p)],
        )
        return registry

    def is_available(self, provider: str) -> bool:
        return self._credentials.get(provider) is not None

    def credentials(self, provider: str) -> Dict[str, str]:
        creds = self._credentials.get(provider)
        if creds is None:
            raise KeyError(provider)
        return creds

    def model_catalog(self, provider: str) -> Dict[str, str]:
        if not self.is_available(provider):
            return {}
        return {mid: e.display_name for mid, e in self._catalog[provider].items()}

    def has_model(self, provider: str, model: str) -> bool:
        return model in self._catalog.get(provider, {})

    def cost_per_token(self, model: str) -> float:
        for models in self._catalog.values():
            entry = models.get(model)
            if entry is not None and entry.cost_per_token is not None:
                return entry.cost_per_token
        return self._default_cost

    def list_models(self) -> Dict[str, Dict[str, str]]:
        return {p: self.model_catalog(p) for p in PROVIDER_IDS if self.is_available(p)}

    def health(self) -> Dict[str, bool]:
        return {p: self.is_available(p) for p in PROVIDER_IDS}


def media_kind(model: str) -> Optional[str]:
    """'image' / 'design' for media-generation model ids, None for text models."""
    mid = (model or "").lower()
    if any(m in mid for m in _IMAGE_MARKERS):
        return "image"
    if any(m in mid for m in _DESIGN_MARKERS):
        return "design"
    return None
