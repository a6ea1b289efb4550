"""
Lexical matcher - classify a listing against a niche vocabulary.
"""
import re
import logging
from typing import Iterable

from ..models.listing import Listing
from ..models.niche import Vocabulary
from ..models.classification import LexicalMatchResult, MatchStatus


logger = logging.getLogger(__name__)


# Household and kitchen appliance businesses are never prospects,
# whatever else their listing says.
HARD_EXCLUSION_TERMS = (
    "licuadora",
    "batidora",
    "cafetera",
    "estufa",
    "microondas",
    "refrigerador",
    "lavadora",
    "secadora",
    "electrodoméstico",
    "electrodomestico",
    "línea blanca",
    "linea blanca",
    "extractor de jugo",
)

CORE_DOMAIN_TERMS = (
    "forestal",
    "agrícola",
    "desbrozadora",
    "podadora",
    "stihl",
    "husqvarna",
)

TITLE_MULTIPLIER = 4
CATEGORY_MULTIPLIER = 2
CORE_DOMAIN_BONUS = 5
NEGATIVE_PENALTY = 10
HARD_EXCLUSION_SCORE = -100

RELEVANT_THRESHOLD = 5
NEUTRAL_THRESHOLD = 1

MAX_REASON_TERMS = 3
MIN_STEM_LENGTH = 4


def _words(text: str) -> list[str]:
    return re.findall(r"\w+", text.lower())


def terms_match(a: str, b: str) -> bool:
    """
    Stem-tolerant comparison: equal, or one is a prefix of the other
    with both at least four characters long ("motosierra"/"motosierras").
    """
    if a == b:
        return True
    if len(a) < MIN_STEM_LENGTH or len(b) < MIN_STEM_LENGTH:
        return False
    return a.startswith(b) or b.startswith(a)


def _field_matches(token: str, words: list[str]) -> bool:
    return any(terms_match(token, word) for word in words)


class LexicalMatcher:
    """
    Deterministic keyword classifier. Holds no state between calls:
    identical inputs always produce identical results.
    """

    def __init__(
        self,
        hard_exclusions: Iterable[str] = HARD_EXCLUSION_TERMS,
        core_terms: Iterable[str] = CORE_DOMAIN_TERMS,
    ):
        self.hard_exclusions = tuple(t.lower() for t in hard_exclusions)
        # Word-start match: plurals still hit, "hidrolavadora" does not
        self._exclusion_patterns = [
            (term, re.compile(rf"\b{re.escape(term)}")) for term in self.hard_exclusions
        ]
        self.core_terms = tuple(t.lower() for t in core_terms)

    def match(
        self,
        listing: Listing,
        vocabulary: Vocabulary,
        negative_terms: Iterable[str] = (),
    ) -> LexicalMatchResult:
        """
        Score a listing against a vocabulary and negative terms.

        Args:
            listing: The listing to classify
            vocabulary: Weighted niche vocabulary
            negative_terms: Niche-specific exclusion terms

        Returns:
            LexicalMatchResult with status, confidence and matched terms
        """
        text = listing.search_text

        # Step 1: Mandatory exclusion beats every positive signal
        excluded = [term for term, pattern in self._exclusion_patterns if pattern.search(text)]
        if excluded:
            return LexicalMatchResult(
                status=MatchStatus.DISCARD,
                confidence=99,
                reason=f"Exclusión obligatoria: '{excluded[0]}' (hogar / línea blanca)",
                matched_terms=[],
                matched_negatives=excluded,
                score=HARD_EXCLUSION_SCORE,
                hard_excluded=True,
            )

        # Step 2: Weighted vocabulary matches in title and category
        title_words = _words(listing.title)
        category_words = _words(listing.type or "")

        score = 0
        contributions: dict[str, int] = {}
        for token, weight in vocabulary.items():
            points = 0
            if _field_matches(token, title_words):
                points += weight * TITLE_MULTIPLIER
            if _field_matches(token, category_words):
                points += weight * CATEGORY_MULTIPLIER
            if points:
                contributions[token] = points
                score += points

        # Step 3: Core domain bonus
        if any(term in text for term in self.core_terms):
            score += CORE_DOMAIN_BONUS

        # Step 4: Niche negative terms
        negatives = []
        for term in negative_terms:
            term = term.lower().strip()
            if term and term in text and term not in negatives:
                negatives.append(term)
                score -= NEGATIVE_PENALTY

        matched = list(contributions)
        top_terms = sorted(matched, key=lambda t: contributions[t], reverse=True)
        top_terms = top_terms[:MAX_REASON_TERMS]

        # Step 5: Thresholds
        if score >= RELEVANT_THRESHOLD:
            status = MatchStatus.RELEVANT
            confidence = min(95, 60 + score * 3)
            if top_terms:
                reason = f"Coincide con el nicho: {', '.join(top_terms)}"
            else:
                reason = "Negocio del sector forestal"
        elif score >= NEUTRAL_THRESHOLD:
            status = MatchStatus.NEUTRAL
            confidence = 40 + score * 5
            reason = f"Coincidencia parcial: {', '.join(top_terms) or 'términos del sector'}"
        else:
            status = MatchStatus.DISCARD
            if negatives:
                confidence = 80
                reason = f"Término excluido: '{negatives[0]}'"
            else:
                confidence = 50
                reason = "Sin coincidencias con el nicho"

        return LexicalMatchResult(
            status=status,
            confidence=confidence,
            reason=reason,
            matched_terms=matched,
            matched_negatives=negatives,
            score=score,
        )


_default_matcher = LexicalMatcher()


def match_listing(
    listing: Listing,
    vocabulary: Vocabulary,
    negative_terms: Iterable[str] = (),
) -> LexicalMatchResult:
    """Classify a listing with the default exclusion and core-term sets."""
    return _default_matcher.match(listing, vocabulary, negative_terms)
