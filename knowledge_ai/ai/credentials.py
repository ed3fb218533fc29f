"""
Credential resolution — picks the API key and model for one call.
Explicit request values win over process-wide defaults from Settings.
Pure lookup: no network I/O happens here.
"""
from typing import Optional

from knowledge_ai.ai.errors import ConfigurationError
from knowledge_ai.ai.normalizer import normalize_model
from knowledge_ai.ai.schemas import (
    AIRequestConfig,
    ProviderVariant,
    ResolvedCredential,
    get_provider_entry,
)
from knowledge_ai.config import Settings, settings as default_settings


class CredentialResolver:
    """Resolves AIRequestConfig into a concrete (api_key, model) pair."""

    def __init__(self, config: Optional[Settings] = None):
        self._settings = config or default_settings

    def resolve(self, config: AIRequestConfig) -> ResolvedCredential:
        """
        Resolve the key and model for a request.

        Raises:
            ConfigurationError if neither the request nor the defaults carry a key.
        """
        provider = config.provider
        model = self.resolve_model(provider, config.model)

        api_key = (config.api_key or "").strip() or self._settings.api_key_for(provider.value)
        if not api_key:
            raise ConfigurationError(
                f"API key is not configured for {provider.value}. "
                f"Please set it in settings or environment variables.",
                provider=provider.value,
                model=model,
            )

        return ResolvedCredential(provider=provider, api_key=api_key, model=model)

    def resolve_model(self, provider: ProviderVariant, model: Optional[str] = None) -> str:
        explicit = (model or "").strip()
        if explicit:
            return normalize_model(provider, explicit)

        configured = self._settings.model_for(provider.value)
        if configured:
            return normalize_model(provider, configured)

        return get_provider_entry(provider).fallback_model

    def has_default_key(self, provider: ProviderVariant) -> bool:
        return bool(self._settings.api_key_for(provider.value))

    def default_provider(self) -> Optional[ProviderVariant]:
        """Provider named by AI_PROVIDER, or None when unset."""
        if not self._settings.AI_PROVIDER:
            return None
        return ProviderVariant(self._settings.AI_PROVIDER)

    def default_config(self) -> Optional[AIRequestConfig]:
        provider = self.default_provider()
        if provider is None:
            return None
        return AIRequestConfig(provider=provider, model=self.resolve_model(provider))
