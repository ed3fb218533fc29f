"""
Test helpers: isolated Settings (no .env, no ambient keys) and a recording httpx transport.
"""
import json

import httpx

from knowledge_ai.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "AI_PROVIDER": None,
        "GEMINI_API_KEY": "",
        "GEMINI_MODEL": "",
        "OPENAI_API_KEY": "",
        "OPENAI_MODEL": "",
        "DEEPSEEK_API_KEY": "",
        "DEEPSEEK_MODEL": "",
        "QWEN_API_KEY": "",
        "QWEN_MODEL": "",
        "ANTHROPIC_API_KEY": "",
        "ANTHROPIC_MODEL": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class RecordingTransport:
    """httpx.MockTransport wrapper that remembers every request it served."""

    def __init__(self, status_code: int = 200, payload=None, raise_exc: Exception = None, text: str = None):
        self.requests = []
        self._status_code = status_code
        self._payload = payload
        self._raise_exc = raise_exc
        self._text = text

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._raise_exc is not None:
            raise self._raise_exc
        if self._text is not None:
            return httpx.Response(self._status_code, text=self._text)
        return httpx.Response(self._status_code, json=self._payload)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


