"""
WordMaster – Review grader
===========================
Maps the user's self-assessment button to an SM-2 quality score
(0 = total blackout … 5 = perfect recall).
"""

from __future__ import annotations

from enum import Enum
from typing import List, Union

from core.errors import InvalidInput


class ReviewResponse(str, Enum):
    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


RESPONSE_QUALITY = {
    ReviewResponse.AGAIN: 1,  # forgotten, lapse
    ReviewResponse.HARD: 3,   # recalled with serious difficulty
    ReviewResponse.GOOD: 4,
    ReviewResponse.EASY: 5,
}


def responses() -> List[ReviewResponse]:
    """Valid response categories, weakest first."""
    return list(RESPONSE_QUALITY)


def grade(response: Union[ReviewResponse, str]) -> int:
    """Return the quality score for *response*.

    Accepts a :class:`ReviewResponse` or its string value (case-insensitive).

    Raises
    ------
    InvalidInput
        If *response* is not one of the known categories.
    """
    if isinstance(response, ReviewResponse):
        return RESPONSE_QUALITY[response]
    if not isinstance(response, str):
        raise InvalidInput(f"unrecognised review response: {response!r}", field="response")
    try:
        category = ReviewResponse(response.strip().lower())
    except ValueError as exc:
        valid = ", ".join(r.value for r in ReviewResponse)
        raise InvalidInput(
            f"unrecognised review response {response!r} (expected one of: {valid})",
            field="response",
        ) from exc
    return RESPONSE_QUALITY[category]
