"""
Tests for mapping review responses to quality scores.
"""

import pytest

from core.config import DEFAULT_CONFIG
from core.errors import InvalidInput
from core.grader import ReviewResponse, grade, responses


class TestGrade:
    @pytest.mark.parametrize("response, quality", [
        (ReviewResponse.AGAIN, 1),
        (ReviewResponse.HARD, 3),
        (ReviewResponse.GOOD, 4),
        (ReviewResponse.EASY, 5),
    ])
    def test_enum_members(self, response, quality):
        assert grade(response) == quality

    def test_string_values_case_insensitive(self):
        assert grade("again") == 1
        assert grade(" Easy ") == 5
        assert grade("GOOD") == 4

    def test_again_is_a_lapse_and_hard_passes(self):
        assert grade("again") < DEFAULT_CONFIG.passing_threshold
        assert grade("hard") >= DEFAULT_CONFIG.passing_threshold

    @pytest.mark.parametrize("bad", ["", "perfect", "4", 4, None])
    def test_unknown_response_rejected(self, bad):
        with pytest.raises(InvalidInput):
            grade(bad)

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError, match="unrecognised"):
            grade("meh")


def test_responses_weakest_first():
    qualities = [grade(r) for r in responses()]
    assert qualities == sorted(qualities)
    assert [r.value for r in responses()] == ["again", "hard", "good", "easy"]
