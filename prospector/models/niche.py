"""
Niche models - target markets and their derived vocabularies.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Niche(BaseModel):
    """
    A named target market. Static configuration, immutable once loaded.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    priority: Literal["ALTA", "MEDIA", "BAJA"] = "MEDIA"
    priority_states: tuple[str, ...] = Field(
        default=(),
        description="Regions to prioritize; not used for scoring"
    )
    keywords: tuple[str, ...] = Field(default=(), description="Positive keyword phrases")
    negative_keywords: tuple[str, ...] = Field(default=(), description="Exclusion terms")
    scian_codes: tuple[str, ...] = ()


class Vocabulary(BaseModel):
    """Weighted term dictionary derived from a niche's keyword phrases."""
    model_config = ConfigDict(frozen=True)

    weights: dict[str, int] = Field(
        default_factory=dict,
        description="Token -> number of distinct phrases containing it"
    )

    def __len__(self) -> int:
        return len(self.weights)

    def __contains__(self, token: object) -> bool:
        return token in self.weights

    def items(self):
        return self.weights.items()

    def weight(self, token: str) -> int:
        return self.weights.get(token, 0)
