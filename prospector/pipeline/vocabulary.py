"""
Vocabulary builder - turn niche keyword phrases into weighted terms.
"""
import logging
import string
from functools import lru_cache
from typing import Iterable, Union

from ..models.niche import Niche, Vocabulary


logger = logging.getLogger(__name__)


MIN_TOKEN_LENGTH = 4

STOP_WORDS = frozenset({
    "a", "al", "ante", "bajo", "cada", "como", "con", "contra", "cual",
    "cuales", "de", "del", "desde", "donde", "durante", "e", "el", "en",
    "entre", "esta", "estas", "este", "estos", "hasta", "la", "las", "lo",
    "los", "mediante", "muy", "o", "otra", "otras", "otro", "otros", "para",
    "pero", "por", "que", "se", "según", "sin", "sobre", "su", "sus",
    "también", "toda", "todas", "todo", "todos", "tras", "u", "un", "una",
    "unas", "unos", "y",
})


def tokenize_phrase(phrase: str) -> list[str]:
    """
    Split a keyword phrase into its significant tokens.
    Order is preserved and each token appears once.
    """
    tokens = []
    for raw in phrase.lower().split():
        token = raw.strip(string.punctuation + "¿¡«»“”")
        if len(token) < MIN_TOKEN_LENGTH or token in STOP_WORDS:
            continue
        if token not in tokens:
            tokens.append(token)
    return tokens


@lru_cache(maxsize=64)
def _build_from_phrases(phrases: tuple[str, ...]) -> Vocabulary:
    weights: dict[str, int] = {}
    for phrase in phrases:
        for token in tokenize_phrase(phrase):
            weights[token] = weights.get(token, 0) + 1
    return Vocabulary(weights=weights)


def build_vocabulary(source: Union[Niche, Iterable[str]]) -> Vocabulary:
    """
    Build the weighted vocabulary for a niche.

    Args:
        source: A Niche, or its positive keyword phrases directly

    Returns:
        Vocabulary where each token's weight is the number of distinct
        phrases containing it
    """
    phrases = source.keywords if isinstance(source, Niche) else source
    vocabulary = _build_from_phrases(tuple(phrases))
    logger.debug(f"Vocabulary built with {len(vocabulary)} terms")
    return vocabulary
