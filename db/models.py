"""
WordMaster – SQLAlchemy ORM Models
===================================
Defines the data schema: Words (content + SM-2 review state) and ReviewLogs.
Timestamps are stored as integer epoch seconds, the same unit the
scheduler uses.
"""

import time

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

from core.models import WordRecord

Base = declarative_base()


def _now() -> int:
    return int(time.time())


# ---------------------------------------------------------------------------
# Word – one vocabulary item with its scheduling state
# ---------------------------------------------------------------------------
class WordRow(Base):
    __tablename__ = "words"

    id = Column(Integer, primary_key=True)

    # Content
    word = Column(String(255), nullable=False)
    phonetic = Column(String(255), nullable=False, default="")
    pronunciation = Column(String(512), nullable=False, default="")  # audio file path
    definition = Column(Text, nullable=False, default="")
    example = Column(Text, nullable=False, default="")
    translation = Column(Text, nullable=False, default="")            # example translation
    image_url = Column(String(1024), nullable=False, default="")

    # SM-2 scheduling fields
    difficulty = Column(Integer, nullable=False, default=0)
    ease_factor = Column(Float, nullable=False, default=2.5)
    interval = Column(Integer, nullable=False, default=0)             # days
    review_count = Column(Integer, nullable=False, default=0)
    last_reviewed = Column(BigInteger, nullable=False, default=0)
    next_review = Column(BigInteger, nullable=False, default=0)
    learned = Column(Boolean, nullable=False, default=False)
    mastered = Column(Boolean, nullable=False, default=False)

    # Relationships
    review_logs = relationship(
        "ReviewLog", back_populates="word", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<WordRow id={self.id} word={self.word!r} next_review={self.next_review}>"


# ---------------------------------------------------------------------------
# ReviewLog – audit trail for every review action
# ---------------------------------------------------------------------------
class ReviewLog(Base):
    __tablename__ = "review_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    word_id = Column(Integer, ForeignKey("words.id", ondelete="CASCADE"), nullable=False)
    reviewed_at = Column(BigInteger, nullable=False, default=_now)
    quality = Column(Integer, nullable=False)  # 0-5 (SM-2 scale)
    ease_factor_after = Column(Float, nullable=True)
    interval_after = Column(Integer, nullable=True)

    # Relationship
    word = relationship("WordRow", back_populates="review_logs")

    def __repr__(self) -> str:
        return f"<ReviewLog word_id={self.word_id} q={self.quality} at={self.reviewed_at}>"


# ---------------------------------------------------------------------------
# Row <-> record conversion
# ---------------------------------------------------------------------------
_RECORD_FIELDS = tuple(WordRecord.__dataclass_fields__)


def row_to_record(row: WordRow) -> WordRecord:
    """Snapshot a row as an immutable ``WordRecord``."""
    return WordRecord(**{name: getattr(row, name) for name in _RECORD_FIELDS})


def apply_record(row: WordRow, record: WordRecord) -> WordRow:
    """Copy every field of *record* except ``id`` onto *row*."""
    for name in _RECORD_FIELDS:
        if name != "id":
            setattr(row, name, getattr(record, name))
    return row
