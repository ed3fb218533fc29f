"""
Model identifier normalization.

The Gemini SDK rejects namespaced identifiers ("models/gemini-1.5-pro"), so Gemini
models are stripped of their prefix and checked against a known-good list.
Other providers take the identifier as given.
"""
import re

from knowledge_ai.ai.schemas import ProviderVariant, parse_provider
from knowledge_ai.core.logging import get_logger

logger = get_logger(__name__)

VALID_GEMINI_MODELS = (
    "gemini-3-pro-preview",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
)
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"

_NAMESPACE_PREFIX = re.compile(r"^(models|gmodels)/")


def normalize_gemini_model(model: str) -> str:
    """Strip the namespace prefix and fall back to the default for unknown models. Never raises."""
    normalized = _NAMESPACE_PREFIX.sub("", (model or "").strip())
    if normalized in VALID_GEMINI_MODELS:
        return normalized

    logger.warning(
        f'Invalid Gemini model "{model}", using default "{DEFAULT_GEMINI_MODEL}"',
        extra={
            "event": "model_normalized",
            "provider": ProviderVariant.GEMINI.value,
            "model": DEFAULT_GEMINI_MODEL,
        },
    )
    return DEFAULT_GEMINI_MODEL


def normalize_model(provider, model: str) -> str:
    if parse_provider(provider) is ProviderVariant.GEMINI:
        return normalize_gemini_model(model)
    return model
