"""
Google Gemini provider — implements AIProvider through the google-generativeai SDK.
The SDK takes the key via genai.configure() and rejects "models/" prefixed ids.
"""
from typing import Optional

from knowledge_ai.ai.errors import ErrorCategory, ProviderError
from knowledge_ai.ai.normalizer import VALID_GEMINI_MODELS, normalize_gemini_model
from knowledge_ai.ai.providers.base import AIProvider
from knowledge_ai.ai.schemas import ProviderVariant
from knowledge_ai.config import Settings


class GeminiProvider(AIProvider):
    """Google Gemini provider (SDK-native key injection)."""

    provider = ProviderVariant.GEMINI
    label = "Gemini"

    def __init__(self, config: Optional[Settings] = None):
        super().__init__(config)
        try:
            import google.generativeai as genai
        except ImportError:
            raise ProviderError(
                "google-generativeai package not installed. Run: pip install google-generativeai",
                provider=self.provider.value,
            )
        self._genai = genai

    def prepare_model(self, model: str) -> str:
        return normalize_gemini_model(model)

    async def _send(self, api_key: str, model: str, prompt: str, probe: bool = False) -> str:
        if probe:
            generation_config = self._genai.GenerationConfig(
                max_output_tokens=self._settings.AI_VALIDATION_MAX_TOKENS,
            )
        else:
            generation_config = self._genai.GenerationConfig(
                temperature=self._settings.AI_TEMPERATURE,
            )

        try:
            # configure() and the model's client binding run before the first await,
            # so concurrent calls on the same loop never see each other's key.
            self._genai.configure(api_key=api_key)
            ai_model = self._genai.GenerativeModel(
                model_name=model,
                generation_config=generation_config,
            )
            response = await ai_model.generate_content_async(prompt)
        except Exception as exc:
            raise self._sdk_error(exc, model) from exc

        if probe:
            return ""

        if not response:
            raise self._error("No response from Gemini API", model)
        try:
            return response.text or ""
        except ValueError as exc:
            # Raised by the SDK when the candidate carries no text parts (e.g. blocked)
            raise self._error(f"No response from Gemini API: {exc}", model) from exc

    def _sdk_error(self, exc: Exception, model: str) -> ProviderError:
        message = str(exc)
        status_code = getattr(exc, "code", None)
        if not isinstance(status_code, int):
            status_code = None

        if status_code == 404 or "404" in message:
            return self._error(
                f'model "{model}" not found (404). '
                f"Please check if the model name is correct. "
                f"Valid models: {', '.join(VALID_GEMINI_MODELS)}",
                model,
                status_code=status_code,
                category=ErrorCategory.NOT_FOUND,
            )
        if status_code in (401, 403) or "403" in message or "API_KEY_INVALID" in message:
            return self._error(
                f'access denied for model "{model}". '
                f"Please check your API key permissions. ({message})",
                model,
                status_code=status_code,
                category=ErrorCategory.UNAUTHORIZED,
            )
        return self._error(message, model, status_code=status_code)
