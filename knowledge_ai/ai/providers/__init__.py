"""
AI Provider abstraction layer.
Supports Gemini, OpenAI, DeepSeek, Qwen and Anthropic with a unified interface.
"""
from knowledge_ai.ai.providers.base import AIProvider
from knowledge_ai.ai.providers.factory import PROVIDER_REGISTRY, get_ai_provider

__all__ = ["AIProvider", "PROVIDER_REGISTRY", "get_ai_provider"]
