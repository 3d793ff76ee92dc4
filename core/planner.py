"""
WordMaster – Review session planner
====================================
Selects the words that are due now and orders them most-overdue first.
"""

from __future__ import annotations

import logging
from itertools import islice
from typing import Iterable, Iterator, List, Optional

from core.errors import InvalidInput
from core.models import WordRecord

log = logging.getLogger(__name__)


def _sort_key(record: WordRecord):
    # Most overdue first, weaker words (lower EF) break ties
    return record.next_review, record.ease_factor, record.id


class DueWords:
    """Lazy, restartable view of the due words in a snapshot of records.

    Every iteration recomputes the selection from the snapshot; no cursor is
    kept between iterations.
    """

    def __init__(self, records: Iterable[WordRecord], now: int, limit: Optional[int] = 0) -> None:
        if limit is None:
            limit = 0
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise InvalidInput(f"limit must be a non-negative integer, got {limit!r}", field="limit")
        if isinstance(now, bool) or not isinstance(now, int) or now < 0:
            raise InvalidInput(f"now must be a non-negative epoch timestamp, got {now!r}", field="now")
        self._snapshot = tuple(records)
        self.now = now
        self.limit = limit

    def __iter__(self) -> Iterator[WordRecord]:
        due = sorted(
            (r for r in self._snapshot if r.review_count == 0 or r.next_review <= self.now),
            key=_sort_key,
        )
        if self.limit:
            return islice(due, self.limit)
        return iter(due)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"<DueWords now={self.now} limit={self.limit} snapshot={len(self._snapshot)}>"


def due_words(records: Iterable[WordRecord], now: int, limit: Optional[int] = 0) -> DueWords:
    """Return the words due for review at *now*.

    Never-reviewed words are always due.  ``limit`` caps the number of
    words; 0 or ``None`` means no cap.
    """
    return DueWords(records, now, limit)


def new_words(records: Iterable[WordRecord], count: int) -> List[WordRecord]:
    """Return up to *count* words not learned yet, in collection order."""
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise InvalidInput(f"count must be a non-negative integer, got {count!r}", field="count")
    picked = list(islice((r for r in records if not r.learned), count))
    log.debug("Picked %d new words (asked for %d)", len(picked), count)
    return picked
