"""
Centralized LLM Audit Logger.
Every generation call (success or failure) flows through this module and emits
one structured `llm_audit` log line. Only a hash of the prompt is recorded.
"""
import hashlib
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from knowledge_ai.core.logging import get_logger

logger = get_logger(__name__)


class LLMCallRecord(BaseModel):
    """Pydantic schema for every LLM call audit record."""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    provider: str
    model: str
    operation: str  # "generate" or "validate"
    prompt_hash: str  # SHA-256 of the prompt
    prompt_length: int
    success: bool
    latency_ms: float = 0.0
    status_code: Optional[int] = None
    error: Optional[str] = None

    @staticmethod
    def hash_prompt(prompt: str) -> str:
        """SHA-256 hash of the prompt for audit traceability."""
        return hashlib.sha256(prompt.encode("utf-8")).hexdigest()


def log_llm_call(record: LLMCallRecord) -> None:
    """Emit a structured audit line for an LLM call."""
    log_extra = {
        "event": "llm_audit",
        "provider": record.provider,
        "model": record.model,
        "operation": record.operation,
        "success": record.success,
        "latency_ms": record.latency_ms,
        "prompt_hash": record.prompt_hash,
        "prompt_length": record.prompt_length,
    }
    if record.status_code is not None:
        log_extra["status_code"] = record.status_code
    if record.error:
        log_extra["error"] = record.error

    if record.success:
        logger.info("LLM call completed", extra=log_extra)
    else:
        logger.error("LLM call failed", extra=log_extra)
