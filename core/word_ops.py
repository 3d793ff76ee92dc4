"""
WordMaster – Word DB Operations
================================
Database helpers wiring the pure scheduler to persistence.
Each function opens and closes its own session; a review is loaded,
scheduled and saved inside a single transaction.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from core.config import DEFAULT_CONFIG, SchedulerConfig
from core.grader import ReviewResponse, grade
from core.importer import build_records, dump_word_list, load_word_entries
from core.models import WordRecord, validate_record
from core.planner import due_words
from core.progress import LearningStats, classify, learning_stats, reset_progress
from core.srs_engine import schedule
from db.database import get_session
from db.models import ReviewLog, WordRow, apply_record, row_to_record

log = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


# ── Load ──────────────────────────────────────────────────────────────

def load_all() -> List[WordRecord]:
    """Return every word as a record, ordered by id."""
    s = get_session()
    try:
        return [row_to_record(r) for r in s.query(WordRow).order_by(WordRow.id).all()]
    finally:
        s.close()


def get_word(word_id: int) -> Optional[WordRecord]:
    """Return the word with *word_id*, or None."""
    s = get_session()
    try:
        row = s.get(WordRow, word_id)
        return row_to_record(row) if row else None
    finally:
        s.close()


# ── Add / save / delete ──────────────────────────────────────────────

def _next_id(s) -> int:
    return (s.query(func.max(WordRow.id)).scalar() or 0) + 1


def add_word(record: WordRecord, config: SchedulerConfig = DEFAULT_CONFIG) -> WordRecord:
    """Insert *record* under a fresh id with the default review state."""
    s = get_session()
    try:
        new_id = _next_id(s)
        stored = reset_progress(record, config)
        row = apply_record(WordRow(id=new_id), stored)
        s.add(row)
        s.commit()
        log.info("Added word %d (%r)", new_id, record.word)
        return row_to_record(row)
    finally:
        s.close()


def save(record: WordRecord, config: SchedulerConfig = DEFAULT_CONFIG) -> bool:
    """Persist *record* over the stored word with the same id.

    Returns False if the word does not exist or the database rejected the
    write; the caller may retry.  A record breaking its invariants raises
    ``InvalidInput`` and nothing is written.
    """
    validate_record(record, config)
    s = get_session()
    try:
        row = s.get(WordRow, record.id)
        if not row:
            return False
        apply_record(row, record)
        s.commit()
        return True
    except SQLAlchemyError:
        s.rollback()
        log.exception("Saving word %d failed", record.id)
        return False
    finally:
        s.close()


def delete_word(word_id: int) -> bool:
    """Delete a word and its review logs (cascade)."""
    s = get_session()
    try:
        row = s.get(WordRow, word_id)
        if not row:
            return False
        s.delete(row)
        s.commit()
        log.info("Deleted word %d", word_id)
        return True
    finally:
        s.close()


# ── Review ────────────────────────────────────────────────────────────

def record_review(
    word_id: int,
    response: Union[ReviewResponse, str],
    now: Optional[int] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Optional[WordRecord]:
    """Grade, schedule and persist a review of *word_id*.

    Also inserts a ``ReviewLog`` for historical tracking.  Returns the
    updated record, or None when the word does not exist.  ``InvalidInput``
    propagates without touching the stored word.
    """
    quality = grade(response)
    now = _now() if now is None else now
    s = get_session()
    try:
        row = s.get(WordRow, word_id)
        if not row:
            return None

        updated = classify(schedule(row_to_record(row), quality, now, config), config)
        apply_record(row, updated)
        s.add(ReviewLog(
            word_id=word_id,
            reviewed_at=now,
            quality=quality,
            ease_factor_after=updated.ease_factor,
            interval_after=updated.interval,
        ))
        s.commit()

        log.info(
            "Reviewed word %d (q=%d) → count=%d ef=%.2f interval=%d next=%d",
            word_id, quality, updated.review_count, updated.ease_factor,
            updated.interval, updated.next_review,
        )
        return updated
    finally:
        s.close()


def reset_word_progress(word_id: int, config: SchedulerConfig = DEFAULT_CONFIG) -> bool:
    """Reset the review state of a word and delete its review logs."""
    s = get_session()
    try:
        row = s.get(WordRow, word_id)
        if not row:
            return False
        apply_record(row, reset_progress(row_to_record(row), config))
        s.query(ReviewLog).filter(ReviewLog.word_id == word_id).delete(
            synchronize_session="fetch"
        )
        s.commit()
        log.info("Reset progress for word %d", word_id)
        return True
    finally:
        s.close()


# ── Query helpers ─────────────────────────────────────────────────────

def get_due_words(now: Optional[int] = None, limit: int = 0) -> List[WordRecord]:
    """Return the words due at *now*, most overdue first."""
    now = _now() if now is None else now
    due = list(due_words(load_all(), now, limit))
    log.info("Found %d due words", len(due))
    return due


def get_stats(now: Optional[int] = None) -> LearningStats:
    """Return learning statistics over every stored word."""
    return learning_stats(load_all(), _now() if now is None else now)


# ── Import / export ───────────────────────────────────────────────────

def import_words_file(filepath: Union[str, Path], config: SchedulerConfig = DEFAULT_CONFIG) -> int:
    """Import a JSON or CSV word list. Returns number of words added."""
    entries = load_word_entries(filepath)
    s = get_session()
    try:
        records = build_records(entries, _next_id(s), config)
        s.add_all(apply_record(WordRow(id=r.id), r) for r in records)
        s.commit()
        log.info("Imported %d words from %s", len(records), filepath)
        return len(records)
    finally:
        s.close()


def export_words_file(filepath: Union[str, Path]) -> int:
    """Export every word to a JSON word list. Returns number of words exported."""
    records = load_all()
    Path(filepath).write_text(dump_word_list(records), encoding="utf-8")
    log.info("Exported %d words → %s", len(records), filepath)
    return len(records)
