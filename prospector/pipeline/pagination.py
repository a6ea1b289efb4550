"""
Pagination tracker - continuation state for provider result pages.
"""
import logging
from typing import Any, Union

from ..errors import PaginationError
from ..models.pagination import PageResult, PaginationState, PaginationStatus


logger = logging.getLogger(__name__)


def advance_pagination(
    state: PaginationState,
    page: Union[PageResult, dict[str, Any]],
) -> PaginationState:
    """
    Compute the state after a fetched page.

    A continuation token always wins and resets the offset. Without a
    token, a full page advances the offset by one page; anything shorter
    means there is nothing left.
    """
    if isinstance(page, dict):
        token = page.get("next_page_token")
        count = len(page.get("listings") or [])
    else:
        token = page.next_page_token
        count = len(page.listings)

    if token:
        return PaginationState(
            status=PaginationStatus.HAS_MORE,
            next_page_token=token,
            offset=0,
            page_size=state.page_size,
        )

    if count >= state.page_size:
        return PaginationState(
            status=PaginationStatus.HAS_MORE,
            offset=state.offset + state.page_size,
            page_size=state.page_size,
        )

    logger.info(f"Pagination exhausted after page of {count} results")
    return PaginationState(status=PaginationStatus.EXHAUSTED, page_size=state.page_size)


def continuation_params(state: PaginationState) -> dict[str, Any]:
    """
    Provider parameters for the next page: the token if held, otherwise
    the offset, never both.

    Raises:
        PaginationError: If there is no token and no offset to continue from
    """
    if state.status != PaginationStatus.HAS_MORE:
        raise PaginationError(f"No further pages to request (state: {state.status.value})")

    if state.next_page_token:
        return {"next_page_token": state.next_page_token}

    if state.offset > 0:
        return {"start": state.offset}

    raise PaginationError("Continuation requested without a token or an offset")
