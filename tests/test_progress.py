"""
Tests for learned / mastered classification and learning statistics.
"""

from dataclasses import replace

from core.config import SECONDS_PER_DAY, SchedulerConfig
from core.models import new_word_record
from core.progress import classify, learning_stats, reset_progress

NOW = 1_700_000_000


def _state(review_count, ease_factor, interval, **kw):
    return replace(
        new_word_record(1, "ephemeral"),
        review_count=review_count,
        ease_factor=ease_factor,
        interval=interval,
        last_reviewed=NOW,
        next_review=NOW + interval * SECONDS_PER_DAY,
        **kw,
    )


class TestClassify:
    def test_new_word_stays_unlearned(self):
        rec = new_word_record(1, "x")
        assert classify(rec) is rec

    def test_learned_needs_count_and_ease(self):
        assert classify(_state(3, 2.5, 6)).learned is True
        assert classify(_state(2, 2.8, 6)).learned is False
        assert classify(_state(5, 2.3, 6)).learned is False

    def test_mastered_needs_interval_and_learned(self):
        rec = classify(_state(4, 2.7, 21))
        assert rec.learned and rec.mastered
        assert classify(_state(4, 2.7, 20)).mastered is False
        # long interval but ease too low to count as learned
        assert classify(_state(6, 1.9, 40)).mastered is False

    def test_never_demotes(self):
        rec = _state(1, 1.3, 1, learned=True, mastered=True)
        out = classify(rec)
        assert out.learned and out.mastered

    def test_custom_thresholds(self):
        config = SchedulerConfig(learned_threshold=1, mastered_interval_days=6)
        rec = classify(_state(1, 2.5, 6), config)
        assert rec.learned and rec.mastered


class TestResetProgress:
    def test_reset_clears_everything(self):
        rec = _state(9, 2.9, 60, learned=True, mastered=True, difficulty=4)
        out = reset_progress(rec)
        assert out == new_word_record(1, "ephemeral")


class TestLearningStats:
    def test_counts(self):
        records = [
            new_word_record(1, "a"),
            replace(_state(3, 2.5, 6, learned=True), id=2, next_review=NOW - 1),
            replace(_state(3, 2.5, 6, learned=True), id=3),
            replace(_state(5, 2.7, 30, learned=True, mastered=True), id=4, next_review=NOW - 1),
        ]
        stats = learning_stats(records, NOW)
        assert stats.as_dict() == {
            "total": 4,
            "learned": 3,
            "mastered": 1,
            "toReview": 1,
            "new": 1,
        }

    def test_empty(self):
        assert learning_stats([], NOW).as_dict()["total"] == 0
