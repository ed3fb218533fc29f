"""
Anthropic provider — Messages API over plain HTTPS.
"""
from knowledge_ai.ai.providers.base import HTTPProvider
from knowledge_ai.ai.schemas import ProviderVariant

ANTHROPIC_ENDPOINT = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(HTTPProvider):
    """Claude provider: x-api-key auth, max_tokens is mandatory."""

    provider = ProviderVariant.ANTHROPIC
    label = "Anthropic"
    endpoint = ANTHROPIC_ENDPOINT

    def _headers(self, api_key: str) -> dict:
        return {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def _body(self, model: str, prompt: str, probe: bool) -> dict:
        max_tokens = (
            self._settings.AI_VALIDATION_MAX_TOKENS if probe else self._settings.AI_MAX_TOKENS_GENERATION
        )
        return {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _extract_text(self, data: dict) -> str:
        return data["content"][0]["text"]
