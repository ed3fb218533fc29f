"""
Tests for configuration, model normalization and credential resolution.
"""
import logging

import pytest
from pydantic import ValidationError

from knowledge_ai.ai.credentials import CredentialResolver
from knowledge_ai.ai.errors import ConfigurationError
from knowledge_ai.ai.normalizer import (
    DEFAULT_GEMINI_MODEL,
    normalize_gemini_model,
    normalize_model,
)
from knowledge_ai.ai.schemas import (
    AIRequestConfig,
    ProviderVariant,
    available_models,
    get_provider_entry,
    parse_provider,
)
from tests.helpers import make_settings


# ═══════════════════════════════════════════════════════════════════
#  Settings
# ═══════════════════════════════════════════════════════════════════

class TestSettings:

    def test_invalid_default_provider_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            make_settings(AI_PROVIDER="claude")
        assert "AI_PROVIDER must be one of" in str(exc_info.value)

    def test_default_provider_is_normalized(self):
        s = make_settings(AI_PROVIDER="  OpenAI ")
        assert s.AI_PROVIDER == "openai"

    def test_blank_default_provider_becomes_none(self):
        s = make_settings(AI_PROVIDER="")
        assert s.AI_PROVIDER is None

    def test_temperature_out_of_range_raises(self):
        with pytest.raises(ValidationError):
            make_settings(AI_TEMPERATURE=5.0)

    def test_non_positive_timeout_raises(self):
        with pytest.raises(ValidationError):
            make_settings(AI_TIMEOUT_SECONDS=0)

    def test_timeout_unset_by_default(self):
        assert make_settings().AI_TIMEOUT_SECONDS is None
        assert make_settings(AI_TIMEOUT_SECONDS=30).AI_TIMEOUT_SECONDS == 30.0

    def test_key_and_model_lookup_by_provider(self):
        s = make_settings(QWEN_API_KEY=" dash-key ", QWEN_MODEL="qwen-max")
        assert s.api_key_for("qwen") == "dash-key"
        assert s.model_for("qwen") == "qwen-max"
        assert s.api_key_for("anthropic") == ""


# ═══════════════════════════════════════════════════════════════════
#  Provider catalog
# ═══════════════════════════════════════════════════════════════════

class TestProviderCatalog:

    def test_five_providers(self):
        assert {p.value for p in ProviderVariant} == {"gemini", "openai", "deepseek", "qwen", "anthropic"}

    def test_every_provider_has_models_and_fallback(self):
        for provider in ProviderVariant:
            entry = get_provider_entry(provider)
            assert entry.models
            assert all(m.provider is provider for m in entry.models)
            assert entry.fallback_model

    def test_models_keep_display_order(self):
        ids = [m.id for m in available_models("openai")]
        assert ids == ["gpt-4o", "gpt-4o-mini", "gpt-4-turbo", "gpt-3.5-turbo"]

    def test_parse_provider_is_case_insensitive(self):
        assert parse_provider(" DeepSeek ") is ProviderVariant.DEEPSEEK

    def test_parse_unknown_provider_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            parse_provider("mistral")

    def test_request_config_accepts_any_case(self):
        config = AIRequestConfig(provider=" OpenAI ")
        assert config.provider is ProviderVariant.OPENAI

    def test_request_config_unknown_provider_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            AIRequestConfig(provider="mistral")


# ═══════════════════════════════════════════════════════════════════
#  Model normalization
# ═══════════════════════════════════════════════════════════════════

class TestModelNormalizer:

    def test_prefix_stripped_unknown_model_falls_back(self):
        assert normalize_gemini_model("models/foo-bar") == DEFAULT_GEMINI_MODEL

    def test_valid_model_unchanged(self):
        assert normalize_gemini_model("gemini-1.5-flash") == "gemini-1.5-flash"

    def test_models_prefix_stripped_for_known_model(self):
        assert normalize_gemini_model("models/gemini-3-pro-preview") == "gemini-3-pro-preview"

    def test_gmodels_prefix_stripped(self):
        assert normalize_gemini_model("gmodels/gemini-1.5-pro") == "gemini-1.5-pro"

    def test_unknown_model_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="knowledge_ai.ai.normalizer"):
            normalize_gemini_model("gpt-4o")
        assert any("Invalid Gemini model" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("raw", [
        "models/foo-bar",
        "gemini-1.5-flash",
        "models/gemini-1.5-pro",
        "",
        "gmodels/models/gemini-1.5-pro",
        "   ",
    ])
    def test_idempotent(self, raw):
        once = normalize_gemini_model(raw)
        assert normalize_gemini_model(once) == once

    def test_other_providers_pass_through(self):
        assert normalize_model("openai", "models/gpt-4o") == "models/gpt-4o"
        assert normalize_model(ProviderVariant.QWEN, "anything") == "anything"

    def test_gemini_routed_through_allow_list(self):
        assert normalize_model("gemini", "models/gemini-1.5-pro") == "gemini-1.5-pro"


# ═══════════════════════════════════════════════════════════════════
#  Credential resolution
# ═══════════════════════════════════════════════════════════════════

class TestCredentialResolver:

    def test_explicit_key_wins_over_default(self):
        resolver = CredentialResolver(make_settings(OPENAI_API_KEY="envkey"))
        resolved = resolver.resolve(AIRequestConfig(provider="openai", api_key="explicit"))
        assert resolved.api_key == "explicit"

    def test_default_key_used_when_absent(self):
        resolver = CredentialResolver(make_settings(DEEPSEEK_API_KEY="envkey"))
        resolved = resolver.resolve(AIRequestConfig(provider="deepseek"))
        assert resolved.api_key == "envkey"

    def test_blank_explicit_key_falls_back_to_default(self):
        resolver = CredentialResolver(make_settings(QWEN_API_KEY="envkey"))
        resolved = resolver.resolve(AIRequestConfig(provider="qwen", api_key="   "))
        assert resolved.api_key == "envkey"

    def test_missing_key_raises_configuration_error(self):
        resolver = CredentialResolver(make_settings())
        with pytest.raises(ConfigurationError) as exc_info:
            resolver.resolve(AIRequestConfig(provider="anthropic"))
        assert "anthropic" in str(exc_info.value)
        assert exc_info.value.provider == "anthropic"

    def test_other_provider_key_is_not_borrowed(self):
        resolver = CredentialResolver(make_settings(OPENAI_API_KEY="sk-openai"))
        with pytest.raises(ConfigurationError):
            resolver.resolve(AIRequestConfig(provider="deepseek"))

    def test_explicit_model_is_normalized(self):
        resolver = CredentialResolver(make_settings(GEMINI_API_KEY="k"))
        resolved = resolver.resolve(
            AIRequestConfig(provider="gemini", model="models/gemini-3-pro-preview")
        )
        assert resolved.model == "gemini-3-pro-preview"

    def test_default_model_from_settings(self):
        resolver = CredentialResolver(make_settings(ANTHROPIC_API_KEY="k", ANTHROPIC_MODEL="claude-3-opus-20240229"))
        resolved = resolver.resolve(AIRequestConfig(provider="anthropic"))
        assert resolved.model == "claude-3-opus-20240229"

    def test_default_gemini_model_from_settings_is_normalized(self):
        resolver = CredentialResolver(make_settings(GEMINI_API_KEY="k", GEMINI_MODEL="models/unknown"))
        resolved = resolver.resolve(AIRequestConfig(provider="gemini"))
        assert resolved.model == DEFAULT_GEMINI_MODEL

    def test_hardcoded_fallback_model(self):
        resolver = CredentialResolver(make_settings(QWEN_API_KEY="k"))
        resolved = resolver.resolve(AIRequestConfig(provider="qwen"))
        assert resolved.model == "qwen-turbo"

    def test_resolved_credential_repr_hides_key(self):
        resolver = CredentialResolver(make_settings())
        resolved = resolver.resolve(AIRequestConfig(provider="openai", api_key="sk-secret"))
        assert "sk-secret" not in repr(resolved)

    def test_default_config_from_ai_provider(self):
        resolver = CredentialResolver(make_settings(AI_PROVIDER="deepseek"))
        config = resolver.default_config()
        assert config.provider is ProviderVariant.DEEPSEEK
        assert config.model == "deepseek-chat"
        assert config.api_key is None

    def test_no_default_config_without_ai_provider(self):
        assert CredentialResolver(make_settings()).default_config() is None
