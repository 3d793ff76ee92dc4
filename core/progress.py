"""
WordMaster – Progress classification
=====================================
Derives the ``learned`` / ``mastered`` flags from a record's review history
and computes collection-level learning statistics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable

from core.config import DEFAULT_CONFIG, SchedulerConfig
from core.models import WordRecord

log = logging.getLogger(__name__)


def classify(record: WordRecord, config: SchedulerConfig = DEFAULT_CONFIG) -> WordRecord:
    """Promote *record* to learned / mastered when it qualifies.

    Promotions only: flags that are already set stay set.
    """
    learned = record.learned or (
        record.review_count >= config.learned_threshold
        and record.ease_factor >= config.default_ease_factor
    )
    mastered = record.mastered or (
        learned and record.interval >= config.mastered_interval_days
    )
    if learned == record.learned and mastered == record.mastered:
        return record

    log.debug("Word %d promoted: learned=%s mastered=%s", record.id, learned, mastered)
    return replace(record, learned=learned, mastered=mastered)


def reset_progress(record: WordRecord, config: SchedulerConfig = DEFAULT_CONFIG) -> WordRecord:
    """Explicit user reset: back to the default, never-reviewed state."""
    return replace(
        record,
        difficulty=config.default_difficulty,
        ease_factor=config.default_ease_factor,
        interval=0,
        review_count=0,
        last_reviewed=0,
        next_review=0,
        learned=False,
        mastered=False,
    )


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LearningStats:
    total: int
    learned: int
    mastered: int
    to_review: int

    @property
    def new(self) -> int:
        return self.total - self.learned

    def as_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "learned": self.learned,
            "mastered": self.mastered,
            "toReview": self.to_review,
            "new": self.new,
        }


def learning_stats(records: Iterable[WordRecord], now: int) -> LearningStats:
    """Count total, learned, mastered and due-for-review words.

    ``to_review`` only counts learned, not yet mastered words that are due.
    """
    total = learned = mastered = to_review = 0
    for r in records:
        total += 1
        if r.learned:
            learned += 1
        if r.mastered:
            mastered += 1
        if r.learned and not r.mastered and r.next_review <= now:
            to_review += 1
    return LearningStats(total=total, learned=learned, mastered=mastered, to_review=to_review)
