"""
Classification models - lexical matches, AI verdicts and merged results.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .enrichment import EnrichmentRecord


class MatchStatus(str, Enum):
    """Classification of a listing against the active niche."""
    RELEVANT = "relevant"
    NEUTRAL = "neutral"
    DISCARD = "discard"


class Verdict(str, Enum):
    """Verdict values returned by the AI classifier."""
    PROSPECT = "prospect"
    IRRELEVANT = "irrelevant"
    UNCERTAIN = "uncertain"


class ClassificationSource(str, Enum):
    """Which input decided the merged status."""
    LEXICAL = "lexical"
    AI = "ai"
    AI_ONLY = "ai_only"


class LexicalMatchResult(BaseModel):
    """Local, synchronous classification of one listing against a niche."""
    status: MatchStatus
    confidence: int = Field(ge=0, le=100)
    reason: str
    matched_terms: list[str] = Field(default_factory=list)
    matched_negatives: list[str] = Field(default_factory=list)
    score: int = Field(description="Raw weighted score, may be negative")
    hard_excluded: bool = Field(
        default=False,
        description="A domain-wide exclusion term was found"
    )


class AIVerdict(BaseModel):
    """Externally computed verdict for a single listing."""
    verdict: Verdict
    reason: str = ""


class MergedClassification(BaseModel):
    """
    Final classification for a listing. Never persisted, rebuilt on every
    read from the lexical result, AI verdict and enrichment record.
    """
    status: MatchStatus
    reason: str
    confidence: int = Field(ge=0, le=100)
    source: ClassificationSource
    ai_verdict: Optional[AIVerdict] = None
    lexical: Optional[LexicalMatchResult] = None
    enrichment: Optional[EnrichmentRecord] = None
