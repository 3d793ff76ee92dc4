"""
WordMaster – Word review record
================================
``WordRecord`` is the immutable review state of one vocabulary item plus its
descriptive content.  The scheduler only ever reads and writes the review
fields; the content fields travel along untouched.

Serialized form (``to_dict`` / ``from_dict``) uses the camelCase keys of the
word-list JSON and integer epoch **seconds** for both timestamps.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping

from core.config import DEFAULT_CONFIG, SchedulerConfig
from core.errors import InvalidInput

CONTENT_FIELDS = (
    "word",
    "phonetic",
    "pronunciation",
    "definition",
    "example",
    "translation",
    "image_url",
)

# python attribute → wire key
_WIRE_KEYS = {
    "id": "id",
    "word": "word",
    "phonetic": "phonetic",
    "pronunciation": "pronunciation",
    "definition": "definition",
    "example": "example",
    "translation": "translation",
    "image_url": "imageUrl",
    "difficulty": "difficulty",
    "ease_factor": "easeFactor",
    "interval": "interval",
    "review_count": "reviewCount",
    "last_reviewed": "lastReviewed",
    "next_review": "nextReview",
    "learned": "learned",
    "mastered": "mastered",
}


@dataclass(frozen=True)
class WordRecord:
    id: int
    word: str
    phonetic: str
    pronunciation: str
    definition: str
    example: str
    translation: str
    image_url: str
    difficulty: int
    ease_factor: float
    interval: int              # days, 0 = not yet scheduled
    review_count: int
    last_reviewed: int         # epoch seconds
    next_review: int           # epoch seconds
    learned: bool
    mastered: bool

    @property
    def is_new(self) -> bool:
        return self.review_count == 0

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation with camelCase keys."""
        return {_WIRE_KEYS[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], config: SchedulerConfig = DEFAULT_CONFIG) -> "WordRecord":
        """Build a record from its wire representation.

        Every key must be present with the right type; nothing is defaulted.

        Raises
        ------
        InvalidInput
            On a missing key or a value outside its declared domain.
        """
        if not isinstance(data, Mapping):
            raise InvalidInput(f"word record must be a mapping, got {type(data).__name__}")

        values: Dict[str, Any] = {}
        for name, key in _WIRE_KEYS.items():
            if key not in data:
                raise InvalidInput(f"missing field {key!r}", field=key)
            values[name] = data[key]

        for name in CONTENT_FIELDS:
            if not isinstance(values[name], str):
                raise InvalidInput(f"{_WIRE_KEYS[name]!r} must be a string", field=_WIRE_KEYS[name])
        for name in ("learned", "mastered"):
            if not isinstance(values[name], bool):
                raise InvalidInput(f"{name!r} must be a boolean", field=name)

        record = cls(**values)
        validate_record(record, config)
        if not isinstance(record.ease_factor, float):
            record = replace(record, ease_factor=float(record.ease_factor))
        return record


def _require_int(value: Any, key: str, minimum: int | None = None, maximum: int | None = None) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{key!r} must be an integer, got {value!r}", field=key)
    if minimum is not None and value < minimum:
        raise InvalidInput(f"{key!r}={value} is below {minimum}", field=key)
    if maximum is not None and value > maximum:
        raise InvalidInput(f"{key!r}={value} is above {maximum}", field=key)


def validate_record(record: WordRecord, config: SchedulerConfig = DEFAULT_CONFIG) -> None:
    """Check the review-state fields of *record*; raise ``InvalidInput`` on the first bad one."""
    _require_int(record.id, "id")
    _require_int(record.difficulty, "difficulty", config.min_difficulty, config.max_difficulty)
    _require_int(record.interval, "interval", 0)
    _require_int(record.review_count, "reviewCount", 0)
    _require_int(record.last_reviewed, "lastReviewed", 0)
    _require_int(record.next_review, "nextReview", 0)

    ef = record.ease_factor
    if isinstance(ef, bool) or not isinstance(ef, (int, float)) or not math.isfinite(ef):
        raise InvalidInput(f"'easeFactor' must be a finite number, got {ef!r}", field="easeFactor")
    if ef < config.minimum_ease_factor:
        raise InvalidInput(
            f"'easeFactor'={ef} is below the minimum {config.minimum_ease_factor}", field="easeFactor"
        )

    if record.review_count > 0 and record.next_review < record.last_reviewed:
        raise InvalidInput("'nextReview' precedes 'lastReviewed'", field="nextReview")
    if record.mastered and not record.learned:
        raise InvalidInput("'mastered' requires 'learned'", field="mastered")


def new_word_record(
    id: int,
    word: str,
    *,
    phonetic: str = "",
    pronunciation: str = "",
    definition: str = "",
    example: str = "",
    translation: str = "",
    image_url: str = "",
    difficulty: int | None = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> WordRecord:
    """Create a record with the default (never reviewed) review state."""
    if difficulty is None:
        difficulty = config.default_difficulty
    record = WordRecord(
        id=id,
        word=word,
        phonetic=phonetic,
        pronunciation=pronunciation,
        definition=definition,
        example=example,
        translation=translation,
        image_url=image_url,
        difficulty=difficulty,
        ease_factor=config.default_ease_factor,
        interval=0,
        review_count=0,
        last_reviewed=0,
        next_review=0,
        learned=False,
        mastered=False,
    )
    validate_record(record, config)
    return record
