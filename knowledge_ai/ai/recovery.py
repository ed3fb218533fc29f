"""
Response recovery — turns raw model output into an ExtractionResult.

Strategies run in order and the first one that yields a candidate wins:
    1. JSON object inside a ``` / ```json fence
    2. First-to-last brace span anywhere in the text
    3. Line-based fallback (first line = summary, next five = key points)

Free text always degrades to the line fallback. JSON that parses but lacks
`summary` / `keyPoints` is rejected with MalformedResponseError.
"""
import json
import re
from typing import Callable, List, Optional, Tuple

from knowledge_ai.ai.errors import MalformedResponseError
from knowledge_ai.ai.schemas import ExtractionResult
from knowledge_ai.core.logging import get_logger

logger = get_logger(__name__)

FENCED_JSON_PATTERN = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```")
BARE_JSON_PATTERN = re.compile(r"(\{[\s\S]*\})")

MAX_FALLBACK_KEY_POINTS = 5
EMPTY_SUMMARY_PLACEHOLDER = "无法生成摘要"


def _decode_object(span: str) -> dict:
    """json.loads that only accepts objects. Raises ValueError otherwise."""
    data = json.loads(span)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def extract_fenced_json(text: str) -> Optional[dict]:
    """Object inside a markdown code fence; None when there is no fence."""
    match = FENCED_JSON_PATTERN.search(text)
    if not match:
        return None
    return _decode_object(match.group(1))


def extract_bare_json(text: str) -> Optional[dict]:
    """Outermost brace span anywhere in the text; None when there are no braces."""
    match = BARE_JSON_PATTERN.search(text)
    if not match:
        return None
    return _decode_object(match.group(1))


def extract_lines(text: str) -> dict:
    """Manual extraction from unstructured text. Always succeeds."""
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return {
        "summary": lines[0] if lines else EMPTY_SUMMARY_PLACEHOLDER,
        "keyPoints": lines[1:1 + MAX_FALLBACK_KEY_POINTS],
    }


JSON_STRATEGIES: Tuple[Callable[[str], Optional[dict]], ...] = (
    extract_fenced_json,
    extract_bare_json,
)


def _clean_strings(values) -> List[str]:
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


def _key_point_texts(values) -> List[str]:
    """Strings as-is, other JSON values re-serialized as JSON. Nulls and blanks dropped."""
    texts = []
    for value in values:
        if value is None:
            continue
        text = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
        if text.strip():
            texts.append(text.strip())
    return texts


def _to_result(candidate: dict) -> ExtractionResult:
    summary = candidate.get("summary")
    key_points = candidate.get("keyPoints")
    if not isinstance(summary, str) or not summary.strip() or not isinstance(key_points, list):
        raise MalformedResponseError("Invalid response format from AI")

    title = candidate.get("title")
    tags = candidate.get("tags")
    return ExtractionResult(
        title=title.strip() if isinstance(title, str) and title.strip() else None,
        summary=summary.strip(),
        key_points=_key_point_texts(key_points),
        tags=_clean_strings(tags) if isinstance(tags, list) else [],
    )


def locate_json(text: str) -> Optional[dict]:
    """
    Run the JSON strategies in order.

    Returns None when no JSON-like span exists or when the first span found
    does not decode to an object.
    """
    for strategy in JSON_STRATEGIES:
        try:
            candidate = strategy(text)
        except ValueError as exc:
            logger.warning(
                "Failed to parse JSON response, attempting manual extraction",
                extra={"event": "ai_response_recovery", "strategy": strategy.__name__, "error": str(exc)},
            )
            return None
        if candidate is not None:
            return candidate
    return None


def recover(raw_text: str) -> ExtractionResult:
    """
    Recover structured data from raw model output.

    Raises:
        MalformedResponseError if a JSON object was found but lacks the required fields.
    """
    text = raw_text or ""
    candidate = locate_json(text)
    if candidate is None:
        return _to_result(extract_lines(text))
    return _to_result(candidate)
