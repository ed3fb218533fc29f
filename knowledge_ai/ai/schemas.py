"""
AI Pydantic schemas and the closed provider catalog.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from knowledge_ai.ai.errors import ConfigurationError


class ProviderVariant(str, Enum):
    """Supported AI backends. Adding one requires a new provider class in the registry."""
    GEMINI = "gemini"
    OPENAI = "openai"
    DEEPSEEK = "deepseek"
    QWEN = "qwen"
    ANTHROPIC = "anthropic"


class ModelDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    provider: ProviderVariant


class ProviderEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: ProviderVariant
    name: str
    models: List[ModelDescriptor]
    fallback_model: str


def _entry(provider: ProviderVariant, name: str, models: List[tuple], fallback: str) -> ProviderEntry:
    return ProviderEntry(
        provider=provider,
        name=name,
        models=[ModelDescriptor(id=mid, name=mname, provider=provider) for mid, mname in models],
        fallback_model=fallback,
    )


PROVIDER_CATALOG: Dict[ProviderVariant, ProviderEntry] = {
    ProviderVariant.GEMINI: _entry(
        ProviderVariant.GEMINI,
        "Gemini (Google)",
        [
            ("models/gemini-3-pro-preview", "Gemini 3 Pro Preview"),
            ("gemini-1.5-flash", "Gemini 1.5 Flash"),
            ("gemini-1.5-pro", "Gemini 1.5 Pro"),
        ],
        "gemini-1.5-flash",
    ),
    ProviderVariant.OPENAI: _entry(
        ProviderVariant.OPENAI,
        "OpenAI",
        [
            ("gpt-4o", "GPT-4o"),
            ("gpt-4o-mini", "GPT-4o Mini"),
            ("gpt-4-turbo", "GPT-4 Turbo"),
            ("gpt-3.5-turbo", "GPT-3.5 Turbo"),
        ],
        "gpt-4o-mini",
    ),
    ProviderVariant.DEEPSEEK: _entry(
        ProviderVariant.DEEPSEEK,
        "DeepSeek",
        [
            ("deepseek-chat", "DeepSeek Chat"),
            ("deepseek-coder", "DeepSeek Coder"),
        ],
        "deepseek-chat",
    ),
    ProviderVariant.QWEN: _entry(
        ProviderVariant.QWEN,
        "通义千问 (Qwen)",
        [
            ("qwen-turbo", "Qwen Turbo"),
            ("qwen-plus", "Qwen Plus"),
            ("qwen-max", "Qwen Max"),
        ],
        "qwen-turbo",
    ),
    ProviderVariant.ANTHROPIC: _entry(
        ProviderVariant.ANTHROPIC,
        "Claude (Anthropic)",
        [
            ("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet"),
            ("claude-3-opus-20240229", "Claude 3 Opus"),
            ("claude-3-sonnet-20240229", "Claude 3 Sonnet"),
        ],
        "claude-3-5-sonnet-20241022",
    ),
}


def parse_provider(value) -> ProviderVariant:
    """Coerce a provider name (case/whitespace-insensitive) into a ProviderVariant."""
    if isinstance(value, ProviderVariant):
        return value
    try:
        return ProviderVariant(str(value).lower().strip())
    except ValueError:
        raise ConfigurationError(
            f"Unsupported AI provider: '{value}'. "
            f"Must be one of {', '.join(p.value for p in ProviderVariant)}.",
            provider=str(value),
        )


def get_provider_entry(provider) -> ProviderEntry:
    return PROVIDER_CATALOG[parse_provider(provider)]


def available_models(provider) -> List[ModelDescriptor]:
    """Selectable models for a provider, in display order."""
    return list(get_provider_entry(provider).models)


# ═══════════════════════════════════════════════════════════════════
#  Request / result schemas
# ═══════════════════════════════════════════════════════════════════

class AIRequestConfig(BaseModel):
    """Configuration for one AI call. A missing api_key resolves from process defaults."""
    model_config = ConfigDict(frozen=True)

    provider: ProviderVariant
    model: Optional[str] = None
    api_key: Optional[str] = Field(default=None, repr=False)

    @field_validator("provider", mode="before")
    @classmethod
    def coerce_provider(cls, value):
        # ConfigurationError is not a ValueError, so pydantic lets it propagate
        return parse_provider(value)


class ResolvedCredential(BaseModel):
    """Key and model actually used for a call."""
    model_config = ConfigDict(frozen=True)

    provider: ProviderVariant
    api_key: str = Field(repr=False)
    model: str


class ExtractionResult(BaseModel):
    """Structured data recovered from raw model output."""
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    summary: str
    key_points: List[str]
    tags: List[str] = []


class KnowledgeCard(BaseModel):
    """Caller-facing card: title always set, tags padded to a fixed count."""
    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    key_points: List[str]
    tags: List[str]
