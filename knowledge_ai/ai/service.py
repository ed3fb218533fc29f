"""
AI service — the two operations exposed to request handlers.

Usage:
    from knowledge_ai.ai.service import summarize, validate_credential
    ok = await validate_credential("openai", api_key, "gpt-4o-mini")
    result = await summarize(prompt, AIRequestConfig(provider="openai"))
    # result is ExtractionResult(title=..., summary=..., key_points=[...], tags=[...])

Configuration (via .env):
    AI_PROVIDER=gemini|openai|deepseek|qwen|anthropic
    GEMINI_API_KEY / GEMINI_MODEL
    OPENAI_API_KEY / OPENAI_MODEL
    DEEPSEEK_API_KEY / DEEPSEEK_MODEL
    QWEN_API_KEY / QWEN_MODEL
    ANTHROPIC_API_KEY / ANTHROPIC_MODEL
"""
from typing import Optional

from knowledge_ai.ai.cards import DEFAULT_TAG_COUNT, build_knowledge_card
from knowledge_ai.ai.credentials import CredentialResolver
from knowledge_ai.ai.errors import AIServiceError, MalformedResponseError
from knowledge_ai.ai.providers import get_ai_provider
from knowledge_ai.ai.recovery import recover
from knowledge_ai.ai.schemas import AIRequestConfig, ExtractionResult, KnowledgeCard
from knowledge_ai.core.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "validate_credential",
    "summarize",
    "summarize_to_card",
    "get_provider_info",
]


async def validate_credential(provider, api_key: str, model: str) -> bool:
    """Probe a credential/model pair. Never raises; any failure is False."""
    if not api_key or not api_key.strip():
        return False
    try:
        ai_provider = get_ai_provider(provider)
    except AIServiceError as exc:
        logger.warning(
            "API key validation skipped",
            extra={"event": "ai_validate", "provider": str(provider), "error": str(exc)},
        )
        return False
    return await ai_provider.validate(api_key.strip(), model)


async def summarize(
    prompt: str,
    config: AIRequestConfig,
    resolver: Optional[CredentialResolver] = None,
) -> ExtractionResult:
    """
    Generate and recover a structured summary for a formatted prompt.

    Raises:
        ConfigurationError — no API key could be resolved (no network I/O happened).
        ProviderError — the provider call failed.
        MalformedResponseError — the model returned JSON without summary/keyPoints.
    """
    resolver = resolver or CredentialResolver()
    credential = resolver.resolve(config)
    ai_provider = get_ai_provider(credential.provider)

    raw_text = await ai_provider.generate(credential.api_key, credential.model, prompt)

    try:
        result = recover(raw_text)
    except MalformedResponseError as exc:
        exc.provider = credential.provider.value
        exc.model = credential.model
        logger.error(
            "AI output failed structure validation",
            extra={
                "event": "ai_schema_validation_error",
                "provider": credential.provider.value,
                "model": credential.model,
                "error": str(exc),
            },
        )
        raise

    logger.info(
        "AI summary succeeded",
        extra={
            "event": "ai_call",
            "operation": "summarize",
            "provider": credential.provider.value,
            "model": credential.model,
            "key_points": len(result.key_points),
            "tags": len(result.tags),
        },
    )
    return result


async def summarize_to_card(
    prompt: str,
    config: AIRequestConfig,
    resolver: Optional[CredentialResolver] = None,
    tag_count: int = DEFAULT_TAG_COUNT,
    max_key_points: Optional[int] = None,
) -> KnowledgeCard:
    """summarize() followed by the card shaping the knowledge store expects."""
    result = await summarize(prompt, config, resolver=resolver)
    return build_knowledge_card(result, tag_count=tag_count, max_key_points=max_key_points)


def get_provider_info(resolver: Optional[CredentialResolver] = None) -> dict:
    """Current default AI configuration (no secrets)."""
    resolver = resolver or CredentialResolver()
    config = resolver.default_config()
    if config is None:
        return {"provider": None, "model": None, "has_key": False}
    return {
        "provider": config.provider.value,
        "model": config.model,
        "has_key": resolver.has_default_key(config.provider),
    }
