"""
Pagination models - continuation state for the place-search provider.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .listing import Listing


class PaginationStatus(str, Enum):
    IDLE = "idle"
    HAS_MORE = "has_more"
    EXHAUSTED = "exhausted"


class PaginationState(BaseModel):
    """
    Continuation cursor. A token and a non-zero offset are never held
    at the same time.
    """
    model_config = ConfigDict(frozen=True)

    status: PaginationStatus = PaginationStatus.IDLE
    next_page_token: Optional[str] = None
    offset: int = Field(default=0, ge=0)
    page_size: int = Field(default=20, gt=0)

    @property
    def has_more(self) -> bool:
        return self.status == PaginationStatus.HAS_MORE


class PageResult(BaseModel):
    """One page returned by the provider."""
    listings: list[Listing] = Field(default_factory=list)
    next_page_token: Optional[str] = None
