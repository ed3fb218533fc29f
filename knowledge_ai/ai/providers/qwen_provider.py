"""
Qwen provider — Alibaba DashScope native text-generation endpoint.
Request and response wrap messages/choices in `input` / `output` envelopes.
"""
from knowledge_ai.ai.providers.base import HTTPProvider
from knowledge_ai.ai.schemas import ProviderVariant

QWEN_ENDPOINT = "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"


class QwenProvider(HTTPProvider):
    """DashScope provider: {model, input: {messages}, parameters}."""

    provider = ProviderVariant.QWEN
    label = "Qwen"
    endpoint = QWEN_ENDPOINT

    def _headers(self, api_key: str) -> dict:
        return {"Authorization": f"Bearer {api_key}"}

    def _body(self, model: str, prompt: str, probe: bool) -> dict:
        if probe:
            parameters = {"max_tokens": self._settings.AI_VALIDATION_MAX_TOKENS}
        else:
            parameters = {"temperature": self._settings.AI_TEMPERATURE}
        return {
            "model": model,
            "input": {
                "messages": [{"role": "user", "content": prompt}],
            },
            "parameters": parameters,
        }

    def _extract_text(self, data: dict) -> str:
        return data["output"]["choices"][0]["message"]["content"]

    def _extract_error(self, data):
        # DashScope errors are flat: {"code": ..., "message": ..., "request_id": ...}
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return None
