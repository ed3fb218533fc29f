"""
OpenAI provider — Chat Completions through the AsyncOpenAI client.
DeepSeek speaks the same protocol and reuses this class with its own base URL.
"""
from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI

from knowledge_ai.ai.errors import ProviderError
from knowledge_ai.ai.providers.base import AIProvider
from knowledge_ai.ai.schemas import ProviderVariant
from knowledge_ai.config import Settings

OPENAI_BASE_URL = "https://api.openai.com/v1"
DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"


class OpenAIProvider(AIProvider):
    """OpenAI-compatible chat provider: Bearer auth, choices[0].message.content."""

    provider = ProviderVariant.OPENAI
    label = "OpenAI"
    base_url = OPENAI_BASE_URL

    def __init__(self, config: Optional[Settings] = None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(config)
        self._http_client = http_client

    def _make_client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=self._settings.AI_TIMEOUT_SECONDS,
            max_retries=0,  # Single attempt; callers own retry policy
            http_client=self._http_client,
        )

    async def _send(self, api_key: str, model: str, prompt: str, probe: bool = False) -> str:
        if probe:
            options = {"max_tokens": self._settings.AI_VALIDATION_MAX_TOKENS}
        else:
            options = {"temperature": self._settings.AI_TEMPERATURE}

        client = None
        try:
            client = self._make_client(api_key)
            response = await client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                **options,
            )
        except openai.APIStatusError as exc:
            raise self._status_error(exc, model) from exc
        except Exception as exc:
            # APIConnectionError and friends, plus header encoding failures raised
            # while the SDK builds the request
            raise self._error(f"request failed: {exc}", model) from exc
        finally:
            if client is not None and self._http_client is None:
                await client.close()

        if probe:
            return ""

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    def _status_error(self, exc: "openai.APIStatusError", model: str) -> ProviderError:
        # The SDK unwraps {"error": {...}} into exc.body
        detail = None
        if isinstance(exc.body, dict) and exc.body.get("message"):
            detail = str(exc.body["message"])
        return self._error(
            detail or exc.response.reason_phrase or str(exc),
            model,
            status_code=exc.status_code,
        )


class DeepSeekProvider(OpenAIProvider):
    """DeepSeek — OpenAI-compatible endpoint."""

    provider = ProviderVariant.DEEPSEEK
    label = "DeepSeek"
    base_url = DEEPSEEK_BASE_URL
