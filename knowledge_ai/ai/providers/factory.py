"""
AI Provider registry — returns the strategy class for a ProviderVariant.
The mapping is closed: every variant has exactly one implementation.
"""
from typing import Dict, Optional, Type

from knowledge_ai.ai.providers.anthropic_provider import AnthropicProvider
from knowledge_ai.ai.providers.base import AIProvider
from knowledge_ai.ai.providers.gemini_provider import GeminiProvider
from knowledge_ai.ai.providers.openai_provider import DeepSeekProvider, OpenAIProvider
from knowledge_ai.ai.providers.qwen_provider import QwenProvider
from knowledge_ai.ai.schemas import ProviderVariant, parse_provider
from knowledge_ai.config import Settings

PROVIDER_REGISTRY: Dict[ProviderVariant, Type[AIProvider]] = {
    ProviderVariant.GEMINI: GeminiProvider,
    ProviderVariant.OPENAI: OpenAIProvider,
    ProviderVariant.DEEPSEEK: DeepSeekProvider,
    ProviderVariant.QWEN: QwenProvider,
    ProviderVariant.ANTHROPIC: AnthropicProvider,
}


def get_ai_provider(provider, config: Optional[Settings] = None) -> AIProvider:
    """
    Instantiate the provider strategy for a variant.
    Raises ConfigurationError if the provider name is unsupported.
    """
    variant = parse_provider(provider)
    return PROVIDER_REGISTRY[variant](config)
