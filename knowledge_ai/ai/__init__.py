"""
Multi-provider AI invocation layer.
Resolves credentials, dispatches to the provider, recovers structured output.
"""
from knowledge_ai.ai.errors import (
    AIServiceError,
    ConfigurationError,
    ErrorCategory,
    MalformedResponseError,
    ProviderError,
)
from knowledge_ai.ai.schemas import AIRequestConfig, ExtractionResult, KnowledgeCard, ProviderVariant
from knowledge_ai.ai.service import get_provider_info, summarize, summarize_to_card, validate_credential

__all__ = [
    "AIRequestConfig",
    "AIServiceError",
    "ConfigurationError",
    "ErrorCategory",
    "ExtractionResult",
    "KnowledgeCard",
    "MalformedResponseError",
    "ProviderError",
    "ProviderVariant",
    "get_provider_info",
    "summarize",
    "summarize_to_card",
    "validate_credential",
]
