"""
Application configuration loaded from environment variables.
Process-wide AI defaults (keys and models per provider) are read once at startup.
"""
from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings

KNOWN_PROVIDERS = ("gemini", "openai", "deepseek", "qwen", "anthropic")


class Settings(BaseSettings):
    # ── App ──
    APP_NAME: str = "Knowledge AI"
    LOG_LEVEL: str = "INFO"

    # ── AI defaults ──
    AI_PROVIDER: Optional[str] = None  # gemini | openai | deepseek | qwen | anthropic
    AI_TEMPERATURE: float = 0.7
    AI_MAX_TOKENS_GENERATION: int = 4096   # Anthropic requires an explicit cap
    AI_VALIDATION_MAX_TOKENS: int = 5      # Keep credential probes cheap
    AI_TIMEOUT_SECONDS: Optional[float] = None  # None: no client-side timeout

    # ── Gemini ──
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = ""

    # ── OpenAI ──
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = ""

    # ── DeepSeek ──
    DEEPSEEK_API_KEY: str = ""
    DEEPSEEK_MODEL: str = ""

    # ── Qwen (DashScope) ──
    QWEN_API_KEY: str = ""
    QWEN_MODEL: str = ""

    # ── Anthropic ──
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_MODEL: str = ""

    def api_key_for(self, provider: str) -> str:
        """Return the default API key configured for a provider ('' if none)."""
        return (getattr(self, f"{provider.upper()}_API_KEY", "") or "").strip()

    def model_for(self, provider: str) -> str:
        """Return the default model configured for a provider ('' if none)."""
        return (getattr(self, f"{provider.upper()}_MODEL", "") or "").strip()

    @model_validator(mode="after")
    def validate_ai_config(self) -> "Settings":
        """Reject unknown default providers and out-of-range sampling settings."""
        if self.AI_PROVIDER is not None:
            provider = self.AI_PROVIDER.lower().strip()
            if provider and provider not in KNOWN_PROVIDERS:
                raise ValueError(
                    f"AI_PROVIDER must be one of {KNOWN_PROVIDERS}, got '{provider}'"
                )
            self.AI_PROVIDER = provider or None

        if self.AI_TEMPERATURE < 0 or self.AI_TEMPERATURE > 2:
            raise ValueError(
                f"AI_TEMPERATURE must be 0–2, got {self.AI_TEMPERATURE}"
            )

        if self.AI_TIMEOUT_SECONDS is not None and self.AI_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"AI_TIMEOUT_SECONDS must be positive, got {self.AI_TIMEOUT_SECONDS}"
            )

        return self

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
