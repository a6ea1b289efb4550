"""AI classification of listings."""

from .llm_client import LLMClient
from .classifier import AIClassifier, parse_verdicts

__all__ = ["LLMClient", "AIClassifier", "parse_verdicts"]
