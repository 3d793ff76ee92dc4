"""
WordMaster – SM-2 Spaced Repetition Engine
===========================================
Implements the SuperMemo-2 algorithm as a pure transformation of a
``WordRecord``: the caller owns loading and persisting the result.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Tuple, Union

from core.config import DEFAULT_CONFIG, SECONDS_PER_DAY, SchedulerConfig
from core.errors import InvalidInput, InvariantViolation
from core.grader import ReviewResponse, grade
from core.models import WordRecord, validate_record
from core.progress import classify

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# SM-2 core algorithm
# ---------------------------------------------------------------------------

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _check_quality(quality: int, config: SchedulerConfig) -> None:
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidInput(f"quality must be an integer, got {quality!r}", field="quality")
    if quality < config.min_quality or quality > config.max_quality:
        raise InvalidInput(
            f"quality must be {config.min_quality}-{config.max_quality}, got {quality}",
            field="quality",
        )


def calculate_sm2(
    quality: int,
    review_count: int,
    easiness: float,
    interval: int,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Tuple[float, int]:
    """Apply the SM-2 algorithm and return updated scheduling values.

    Parameters
    ----------
    quality : int
        User self-assessment grade (0 = total blackout … 5 = perfect).
    review_count : int
        Number of reviews completed before this one.
    easiness : float
        Current ease factor (EF).
    interval : int
        Current inter-repetition interval in days (0 = never scheduled).

    Returns
    -------
    (new_easiness, new_interval)
    """
    _check_quality(quality, config)

    # Failed review — relearn
    if quality < config.passing_threshold:
        new_easiness = max(config.minimum_ease_factor, easiness - config.lapse_penalty)
        return new_easiness, config.relearn_interval

    new_easiness = easiness + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    new_easiness = max(config.minimum_ease_factor, new_easiness)

    if review_count == 0 or interval == 0:
        new_interval = config.first_interval
    elif interval <= max(config.first_interval, config.relearn_interval):
        # Previous review was the first success or a lapse
        new_interval = config.second_interval
    else:
        new_interval = max(interval, _round_half_up(interval * new_easiness))

    return new_easiness, new_interval


def _nudge_difficulty(record: WordRecord, quality: int, config: SchedulerConfig) -> int:
    difficulty = record.difficulty
    if quality < config.passing_threshold:
        difficulty += 1
    elif quality >= config.streak_quality and record.interval >= config.second_interval:
        difficulty -= 1
    return min(config.max_difficulty, max(config.min_difficulty, difficulty))


def _heal(record: WordRecord, config: SchedulerConfig) -> WordRecord:
    """Clamp any invariant the computation should never have broken."""
    changes = {}
    if not record.ease_factor >= config.minimum_ease_factor:
        changes["ease_factor"] = config.minimum_ease_factor
    if record.interval < 1:
        changes["interval"] = config.relearn_interval
        changes["next_review"] = record.last_reviewed + config.relearn_interval * SECONDS_PER_DAY
    if not changes:
        return record
    for field, clamped in changes.items():
        log.warning("Word %d: %s", record.id, InvariantViolation(field, getattr(record, field), clamped))
    return replace(record, **changes)


# ---------------------------------------------------------------------------
# Record transformation
# ---------------------------------------------------------------------------

def schedule(
    record: WordRecord,
    quality: int,
    now: int,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> WordRecord:
    """Return the state of *record* after a review graded *quality* at *now*.

    *now* is an epoch timestamp in seconds.  Invalid input raises
    ``InvalidInput`` before anything is computed; *record* itself is never
    modified.
    """
    _check_quality(quality, config)
    if isinstance(now, bool) or not isinstance(now, int) or now < 0:
        raise InvalidInput(f"now must be a non-negative epoch timestamp, got {now!r}", field="now")
    validate_record(record, config)

    new_ef, new_interval = calculate_sm2(
        quality, record.review_count, record.ease_factor, record.interval, config
    )

    updated = replace(
        record,
        ease_factor=new_ef,
        interval=new_interval,
        review_count=record.review_count + 1,
        difficulty=_nudge_difficulty(record, quality, config),
        last_reviewed=now,
        next_review=now + new_interval * SECONDS_PER_DAY,
    )
    updated = _heal(updated, config)

    log.debug(
        "Scheduled word %d (q=%d) → count=%d ef=%.2f interval=%d next=%d",
        updated.id, quality, updated.review_count, updated.ease_factor,
        updated.interval, updated.next_review,
    )
    return updated


def review(
    record: WordRecord,
    response: Union[ReviewResponse, str],
    now: int,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> WordRecord:
    """Grade *response*, schedule the record and update its progress flags."""
    return classify(schedule(record, grade(response), now, config), config)
