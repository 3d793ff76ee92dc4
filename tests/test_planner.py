"""
Tests for due-word selection and ordering.
"""

from dataclasses import replace

import pytest

from core.config import SECONDS_PER_DAY
from core.errors import InvalidInput
from core.models import new_word_record
from core.planner import due_words, new_words

NOW = 1_700_000_000


def _reviewed(id, next_review, ease_factor=2.5, learned=True):
    rec = new_word_record(id, f"word{id}")
    return replace(
        rec,
        review_count=3,
        interval=6,
        ease_factor=ease_factor,
        last_reviewed=next_review - 6 * SECONDS_PER_DAY,
        next_review=next_review,
        learned=learned,
    )


@pytest.fixture
def records():
    return [
        _reviewed(1, NOW - 100),                      # overdue
        _reviewed(2, NOW + SECONDS_PER_DAY),          # future
        new_word_record(3, "fresh"),                  # never reviewed
        _reviewed(4, NOW - 5000, ease_factor=2.0),    # most overdue
        _reviewed(5, NOW - 100, ease_factor=1.6),     # tie with 1, weaker
        _reviewed(6, NOW),                            # due exactly now
    ]


class TestDueWords:
    def test_selection_and_order(self, records):
        assert [r.id for r in due_words(records, NOW)] == [3, 4, 5, 1, 6]

    def test_never_returns_future_reviewed_words(self, records):
        for r in due_words(records, NOW):
            assert r.review_count == 0 or r.next_review <= NOW

    def test_unreviewed_word_with_future_timestamp_is_due(self):
        rec = replace(new_word_record(9, "x"), next_review=NOW + 10 * SECONDS_PER_DAY)
        assert [r.id for r in due_words([rec], NOW)] == [9]

    def test_limit(self, records):
        assert [r.id for r in due_words(records, NOW, limit=2)] == [3, 4]
        assert len(due_words(records, NOW, limit=0)) == 5
        assert len(due_words(records, NOW, limit=None)) == 5

    def test_restartable(self, records):
        due = due_words(records, NOW, limit=3)
        assert list(due) == list(due)

    def test_snapshot_ignores_later_mutation(self, records):
        due = due_words(records, NOW)
        records.clear()
        assert len(due) == 5
        assert due

    def test_empty(self):
        due = due_words([], NOW)
        assert list(due) == []
        assert not due

    @pytest.mark.parametrize("limit", [-1, 1.5, "3"])
    def test_bad_limit(self, records, limit):
        with pytest.raises(InvalidInput):
            due_words(records, NOW, limit=limit)

    def test_bad_now(self, records):
        with pytest.raises(InvalidInput):
            due_words(records, -5)


class TestNewWords:
    def test_returns_unlearned_in_order(self, records):
        unlearned = [_reviewed(7, NOW, learned=False), new_word_record(8, "late")]
        picked = new_words(records + unlearned, 2)
        assert [r.id for r in picked] == [3, 7]

    def test_count_zero(self, records):
        assert new_words(records, 0) == []

    def test_bad_count(self, records):
        with pytest.raises(InvalidInput):
            new_words(records, -1)
