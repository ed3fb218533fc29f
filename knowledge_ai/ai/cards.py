"""
Knowledge card assembly — caller-side shaping of an ExtractionResult.
Title fallback, key-point truncation and fixed-size tag lists live here,
not in the recoverer.
"""
from typing import List, Optional

from knowledge_ai.ai.schemas import ExtractionResult, KnowledgeCard

DEFAULT_TAG_COUNT = 3
TITLE_FALLBACK_LENGTH = 30


def pad_tags(tags: List[str], size: int = DEFAULT_TAG_COUNT) -> List[str]:
    """Truncate or pad with "" so exactly `size` tags remain, preserving order."""
    cleaned = [t.strip() for t in tags if isinstance(t, str) and t.strip()][:size]
    return cleaned + [""] * (size - len(cleaned))


def fallback_title(summary: str) -> str:
    return summary[:TITLE_FALLBACK_LENGTH] + "..."


def build_knowledge_card(
    result: ExtractionResult,
    tag_count: int = DEFAULT_TAG_COUNT,
    max_key_points: Optional[int] = None,
) -> KnowledgeCard:
    key_points = list(result.key_points)
    if max_key_points is not None:
        key_points = key_points[:max_key_points]

    return KnowledgeCard(
        title=result.title or fallback_title(result.summary),
        summary=result.summary,
        key_points=key_points,
        tags=pad_tags(result.tags, tag_count),
    )


def has_tags(card: KnowledgeCard) -> bool:
    """False when every tag slot is an empty placeholder."""
    return any(t.strip() for t in card.tags)
