"""
Verdict merge - resolve lexical, AI and enrichment inputs into one verdict.
"""
import logging
from typing import Optional

from ..models.classification import (
    AIVerdict,
    ClassificationSource,
    LexicalMatchResult,
    MatchStatus,
    MergedClassification,
    Verdict,
)
from ..models.enrichment import EnrichmentRecord


logger = logging.getLogger(__name__)


AI_ONLY_CONFIDENCE = 75
AI_OVERRIDE_CONFIDENCE = 90

AI_ONLY_STATUS = {
    Verdict.PROSPECT: MatchStatus.RELEVANT,
    Verdict.IRRELEVANT: MatchStatus.DISCARD,
    Verdict.UNCERTAIN: MatchStatus.NEUTRAL,
}


def _ai_reason(ai_verdict: AIVerdict) -> str:
    return f"IA: {ai_verdict.reason}" if ai_verdict.reason else f"IA: {ai_verdict.verdict.value}"


def merge_verdict(
    lexical: Optional[LexicalMatchResult] = None,
    ai_verdict: Optional[AIVerdict] = None,
    enrichment: Optional[EnrichmentRecord] = None,
) -> Optional[MergedClassification]:
    """
    Merge the three classification sources for one listing.

    Precedence: a hard-excluded lexical result is final; otherwise an AI
    "irrelevant" discards and an AI "prospect" promotes, whatever the
    lexical status; "uncertain" only annotates the lexical reason.
    Enrichment never changes the status and is attached as is.

    Returns:
        MergedClassification, or None when there is neither a lexical
        result nor an AI verdict
    """
    if lexical is None:
        if ai_verdict is None:
            return None
        return MergedClassification(
            status=AI_ONLY_STATUS[ai_verdict.verdict],
            reason=_ai_reason(ai_verdict),
            confidence=AI_ONLY_CONFIDENCE,
            source=ClassificationSource.AI_ONLY,
            ai_verdict=ai_verdict,
            enrichment=enrichment,
        )

    if lexical.hard_excluded and ai_verdict is not None and ai_verdict.verdict == Verdict.PROSPECT:
        logger.debug("AI prospect verdict ignored for hard-excluded listing")

    if ai_verdict is None or lexical.hard_excluded:
        return MergedClassification(
            status=lexical.status,
            reason=lexical.reason,
            confidence=lexical.confidence,
            source=ClassificationSource.LEXICAL,
            ai_verdict=ai_verdict,
            lexical=lexical,
            enrichment=enrichment,
        )

    if ai_verdict.verdict == Verdict.IRRELEVANT:
        status = MatchStatus.DISCARD
    elif ai_verdict.verdict == Verdict.PROSPECT:
        status = MatchStatus.RELEVANT
    else:
        return MergedClassification(
            status=lexical.status,
            reason=f"{lexical.reason} (IA: incierto)",
            confidence=lexical.confidence,
            source=ClassificationSource.LEXICAL,
            ai_verdict=ai_verdict,
            lexical=lexical,
            enrichment=enrichment,
        )

    return MergedClassification(
        status=status,
        reason=_ai_reason(ai_verdict),
        confidence=AI_OVERRIDE_CONFIDENCE,
        source=ClassificationSource.AI,
        ai_verdict=ai_verdict,
        lexical=lexical,
        enrichment=enrichment,
    )
