"""
Abstract base class for AI providers.
All providers implement _send(); validate() and generate() are shared.
"""
import abc
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from knowledge_ai.ai.errors import ErrorCategory, ProviderError
from knowledge_ai.ai.llm_audit_logger import LLMCallRecord, log_llm_call
from knowledge_ai.ai.schemas import ProviderVariant
from knowledge_ai.config import Settings, settings as default_settings
from knowledge_ai.core.logging import get_logger

logger = get_logger(__name__)

# Minimal prompt for credential probes
VALIDATION_PROMPT = "test"


class AIProvider(abc.ABC):
    """Abstract AI provider. One concrete subclass per ProviderVariant."""

    provider: ProviderVariant
    label: str = "AI"

    def __init__(self, config: Optional[Settings] = None):
        self._settings = config or default_settings

    @abc.abstractmethod
    async def _send(self, api_key: str, model: str, prompt: str, probe: bool = False) -> str:
        """
        Perform exactly one provider call and return the generated text.

        Args:
            api_key: Credential for this call only.
            model: Provider model identifier (already normalized).
            prompt: User prompt.
            probe: True for credential validation (output capped to a few tokens).

        Raises:
            ProviderError on any transport, HTTP or SDK failure.
        """
        ...

    def prepare_model(self, model: str) -> str:
        """Hook for providers that must rewrite the model identifier."""
        return model

    async def validate(self, api_key: str, model: str) -> bool:
        """Cheap credential/model probe. Never raises."""
        model = self.prepare_model(model)
        try:
            await self._send(api_key, model, VALIDATION_PROMPT, probe=True)
        except Exception as exc:
            logger.warning(
                f"{self.label} API key validation failed",
                extra={
                    "event": "ai_validate",
                    "provider": self.provider.value,
                    "model": model,
                    "success": False,
                    "error": str(exc),
                },
            )
            return False

        logger.info(
            f"{self.label} API key validation succeeded",
            extra={"event": "ai_validate", "provider": self.provider.value, "model": model, "success": True},
        )
        return True

    async def generate(self, api_key: str, model: str, prompt: str) -> str:
        """
        Send the prompt and return the raw generated text.

        Raises:
            ProviderError — never returns dummy data.
        """
        model = self.prepare_model(model)
        prompt_hash = LLMCallRecord.hash_prompt(prompt)
        logger.info(
            f"[{self.label} API] Using model: {model}",
            extra={"event": "ai_call_start", "provider": self.provider.value, "model": model},
        )

        start = time.perf_counter()
        try:
            text = await self._send(api_key, model, prompt)
        except ProviderError as exc:
            latency = (time.perf_counter() - start) * 1000
            log_llm_call(LLMCallRecord(
                provider=self.provider.value,
                model=model,
                operation="generate",
                prompt_hash=prompt_hash,
                prompt_length=len(prompt),
                success=False,
                latency_ms=round(latency, 2),
                status_code=exc.status_code,
                error=str(exc),
            ))
            raise

        latency = (time.perf_counter() - start) * 1000
        log_llm_call(LLMCallRecord(
            provider=self.provider.value,
            model=model,
            operation="generate",
            prompt_hash=prompt_hash,
            prompt_length=len(prompt),
            success=True,
            latency_ms=round(latency, 2),
        ))
        logger.info(
            f"[{self.label} API] Successfully received response",
            extra={
                "event": "ai_call_complete",
                "provider": self.provider.value,
                "model": model,
                "latency_ms": round(latency, 2),
            },
        )
        return text

    def _error(
        self,
        detail: str,
        model: str,
        status_code: Optional[int] = None,
        category: Optional[ErrorCategory] = None,
    ) -> ProviderError:
        return ProviderError(
            f"{self.label} API error: {detail}",
            provider=self.provider.value,
            model=model,
            category=category or ErrorCategory.from_status(status_code),
            status_code=status_code,
        )


class HTTPProvider(AIProvider):
    """Provider speaking a plain JSON-over-HTTPS protocol through httpx."""

    endpoint: str

    def __init__(self, config: Optional[Settings] = None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(config)
        self._http_client = http_client

    @abc.abstractmethod
    def _headers(self, api_key: str) -> dict:
        ...

    @abc.abstractmethod
    def _body(self, model: str, prompt: str, probe: bool) -> dict:
        ...

    @abc.abstractmethod
    def _extract_text(self, data: dict) -> str:
        ...

    def _extract_error(self, data) -> Optional[str]:
        """Provider error text from an error body, or None when not present."""
        if isinstance(data, dict):
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return None

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._settings.AI_TIMEOUT_SECONDS) as client:
            yield client

    async def _send(self, api_key: str, model: str, prompt: str, probe: bool = False) -> str:
        try:
            headers = {"Content-Type": "application/json", **self._headers(api_key)}
            async with self._client() as client:
                response = await client.post(
                    self.endpoint,
                    headers=headers,
                    json=self._body(model, prompt, probe),
                )
        except Exception as exc:
            # Transport failures, and keys httpx cannot encode into a header
            raise self._error(f"request failed: {exc}", model) from exc

        if not response.is_success:
            try:
                detail = self._extract_error(response.json())
            except ValueError:
                detail = None
            raise self._error(detail or response.reason_phrase, model, status_code=response.status_code)

        if probe:
            return ""

        try:
            data = response.json()
        except ValueError as exc:
            raise self._error("response body is not valid JSON", model, status_code=response.status_code) from exc

        try:
            return self._extract_text(data) or ""
        except (KeyError, IndexError, TypeError, AttributeError):
            return ""
