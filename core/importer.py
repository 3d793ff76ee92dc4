"""
WordMaster – Word list import & export
=======================================
Supports two input formats:

1. **Word-list JSON** – ``{"words": [{"word": ..., "definition": ...}, ...]}``
   (a bare list of word objects is accepted too).
2. **Dictionary CSV** – the spreadsheet export with the columns
   ``id, word, en_phonetic, us_phonetic, desc, en_pronunciation,
   us_pronunciation, svg_url`` and a header row.

Imported words always start from the default review state: any review
fields present in the input are ignored.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from core.config import DEFAULT_CONFIG, SchedulerConfig
from core.errors import InvalidInput
from core.models import CONTENT_FIELDS, WordRecord, new_word_record

log = logging.getLogger(__name__)

WordEntry = Dict[str, str]

# wire key → python attribute, descriptive content only
_ENTRY_KEYS = {
    "word": "word",
    "phonetic": "phonetic",
    "pronunciation": "pronunciation",
    "definition": "definition",
    "example": "example",
    "translation": "translation",
    "imageUrl": "image_url",
}


# ──────────────────────────────────────────────────────────────────────
# Raw text reader
# ──────────────────────────────────────────────────────────────────────

def read_text(filepath: str | Path) -> str:
    """Read a text file with automatic encoding detection."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Word list not found: {filepath}")

    for encoding in ("utf-8-sig", "cp1252", "latin-1"):
        try:
            text = filepath.read_text(encoding=encoding)
            log.info("Read %d chars from %s (encoding=%s)", len(text), filepath.name, encoding)
            return text
        except (UnicodeDecodeError, ValueError):
            continue

    raise UnicodeDecodeError(
        "all", b"", 0, 1, f"Could not decode {filepath.name} with any supported encoding"
    )


# ──────────────────────────────────────────────────────────────────────
# Parsers
# ──────────────────────────────────────────────────────────────────────

def _entry_from_object(obj: Any, index: int) -> WordEntry:
    if not isinstance(obj, dict):
        raise InvalidInput(f"word #{index} must be an object, got {type(obj).__name__}")
    entry: WordEntry = {}
    for key, attr in _ENTRY_KEYS.items():
        value = obj.get(key, "")
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise InvalidInput(f"word #{index}: {key!r} must be a string", field=key)
        entry[attr] = value.strip()
    if not entry["word"]:
        raise InvalidInput(f"word #{index} has an empty 'word'", field="word")
    return entry


def parse_word_list_json(text: str) -> List[WordEntry]:
    """Parse a word-list JSON document into content entries."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidInput(f"malformed word list JSON: {exc}") from exc

    if isinstance(data, dict):
        if "words" not in data:
            raise InvalidInput("word list JSON has no 'words' key", field="words")
        data = data["words"]
    if not isinstance(data, list):
        raise InvalidInput("'words' must be a list", field="words")

    entries = [_entry_from_object(obj, i) for i, obj in enumerate(data)]
    log.info("Parsed %d words from JSON", len(entries))
    return entries


def parse_dictionary_csv(text: str) -> List[WordEntry]:
    """Parse the dictionary CSV export into content entries.

    The US phonetic wins over the British one, likewise for the
    pronunciation file.  Rows with fewer than eight columns or an empty
    word are skipped.
    """
    reader = csv.reader(io.StringIO(text))
    next(reader, None)  # header

    entries: List[WordEntry] = []
    skipped = 0
    for row in reader:
        if len(row) < 8 or not row[1].strip():
            skipped += 1
            continue
        _, word, en_phonetic, us_phonetic, desc, en_audio, us_audio, svg_url = (
            c.strip() for c in row[:8]
        )
        entries.append({
            "word": word,
            "phonetic": us_phonetic or en_phonetic,
            "pronunciation": us_audio or en_audio,
            "definition": desc,
            "example": "",
            "translation": "",
            "image_url": svg_url,
        })

    log.info("Parsed %d words from CSV (%d rows skipped)", len(entries), skipped)
    return entries


def load_word_entries(filepath: str | Path) -> List[WordEntry]:
    """Dispatch to the right parser based on file extension."""
    filepath = Path(filepath)
    ext = filepath.suffix.lower()
    if ext == ".json":
        return parse_word_list_json(read_text(filepath))
    if ext == ".csv":
        return parse_dictionary_csv(read_text(filepath))
    raise InvalidInput(f"Unsupported file type: {ext}", field="path")


# ──────────────────────────────────────────────────────────────────────
# Records
# ──────────────────────────────────────────────────────────────────────

def build_records(
    entries: Iterable[WordEntry],
    start_id: int,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> List[WordRecord]:
    """Turn content entries into default-state records numbered from *start_id*."""
    records = []
    for offset, entry in enumerate(entries):
        content = {name: entry.get(name, "") for name in CONTENT_FIELDS}
        word = content.pop("word")
        records.append(new_word_record(start_id + offset, word, config=config, **content))
    return records


def dump_word_list(records: Iterable[WordRecord]) -> str:
    """Serialize *records* as a ``{"words": [...]}`` JSON document."""
    return json.dumps({"words": [r.to_dict() for r in records]}, ensure_ascii=False, indent=2)
