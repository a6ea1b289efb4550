"""
Exceptions raised at the boundaries of the qualification pipeline.

Scoring, matching, merging and sorting never raise for missing listing
data; only external collaborators and caller misuse end up here.
"""
from typing import Optional


class ProspectorError(Exception):
    """Base class for all Prospector errors."""


class AIResponseParseError(ProspectorError, ValueError):
    """The AI classifier returned text that is not a valid verdict batch."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class PaginationError(ProspectorError, RuntimeError):
    """A continuation was requested with neither a token nor an offset."""


class ProviderError(ProspectorError, RuntimeError):
    """The place-search provider reported an error or is not configured."""
