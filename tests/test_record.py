"""
Tests for WordRecord creation, validation and wire serialization.
"""

import json
from dataclasses import FrozenInstanceError, replace

import pytest

from core.errors import InvalidInput
from core.models import WordRecord, new_word_record
from core.srs_engine import review

T0 = 1_700_000_000


@pytest.fixture
def reviewed():
    rec = new_word_record(
        42,
        "ubiquitous",
        phonetic="/juːˈbɪkwɪtəs/",
        pronunciation="audio/ubiquitous.mp3",
        definition="adj. present everywhere",
        example="Smartphones are ubiquitous.",
        translation="智能手机无处不在。",
        image_url="https://example.org/ubiquitous.svg",
        difficulty=2,
    )
    for day, response in ((0, "good"), (1, "easy"), (7, "easy"), (23, "easy")):
        rec = review(rec, response, T0 + day * 86400)
    return rec


class TestNewWordRecord:
    def test_defaults(self):
        rec = new_word_record(1, "apple")
        assert rec.review_count == 0
        assert rec.interval == 0
        assert rec.ease_factor == 2.5
        assert rec.difficulty == 0
        assert not rec.learned and not rec.mastered
        assert rec.is_new

    def test_rejects_bad_difficulty(self):
        with pytest.raises(InvalidInput):
            new_word_record(1, "apple", difficulty=6)

    def test_frozen(self):
        rec = new_word_record(1, "apple")
        with pytest.raises(FrozenInstanceError):
            rec.interval = 3


class TestSerialization:
    def test_wire_keys(self, reviewed):
        data = reviewed.to_dict()
        assert set(data) == {
            "id", "word", "phonetic", "pronunciation", "definition", "example",
            "translation", "imageUrl", "difficulty", "easeFactor", "interval",
            "reviewCount", "lastReviewed", "nextReview", "learned", "mastered",
        }
        assert data["imageUrl"] == "https://example.org/ubiquitous.svg"
        assert isinstance(data["nextReview"], int)

    def test_round_trip(self, reviewed):
        assert WordRecord.from_dict(reviewed.to_dict()) == reviewed

    def test_round_trip_through_json(self, reviewed):
        text = json.dumps(reviewed.to_dict(), ensure_ascii=False)
        assert WordRecord.from_dict(json.loads(text)) == reviewed

    def test_integral_ease_factor_becomes_float(self, reviewed):
        data = reviewed.to_dict()
        data["easeFactor"] = 3
        rec = WordRecord.from_dict(data)
        assert isinstance(rec.ease_factor, float)

    @pytest.mark.parametrize("key", ["id", "easeFactor", "nextReview", "mastered", "imageUrl"])
    def test_missing_field(self, reviewed, key):
        data = reviewed.to_dict()
        del data[key]
        with pytest.raises(InvalidInput) as exc:
            WordRecord.from_dict(data)
        assert exc.value.field == key

    @pytest.mark.parametrize("key, value", [
        ("difficulty", 7),
        ("difficulty", -1),
        ("interval", -1),
        ("reviewCount", True),
        ("reviewCount", 2.0),
        ("easeFactor", 1.0),
        ("easeFactor", float("nan")),
        ("easeFactor", "2.5"),
        ("lastReviewed", -10),
        ("learned", 1),
        ("word", None),
    ])
    def test_out_of_domain(self, reviewed, key, value):
        data = reviewed.to_dict()
        data[key] = value
        with pytest.raises(InvalidInput):
            WordRecord.from_dict(data)

    def test_mastered_requires_learned(self, reviewed):
        data = replace(reviewed, learned=False).to_dict()
        with pytest.raises(InvalidInput, match="mastered"):
            WordRecord.from_dict(data)

    def test_next_review_before_last(self, reviewed):
        data = reviewed.to_dict()
        data["nextReview"] = data["lastReviewed"] - 1
        with pytest.raises(InvalidInput):
            WordRecord.from_dict(data)

    def test_not_a_mapping(self):
        with pytest.raises(InvalidInput):
            WordRecord.from_dict(["id", 1])
