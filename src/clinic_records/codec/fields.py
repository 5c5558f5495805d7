"""
Field codec: flat-text encodings for composite and formatted fields.
"""

from __future__ import annotations
from datetime import date, datetime, time
from typing import Iterable
from clinic_records.core.config import DATE_FORMAT, TIME_FORMAT, MEDICATION_DELIMITER

def encode_medications(items: Iterable[str] | str | None) -> str:
    """
    Join medications into one stored string, each followed by the delimiter.
    Items are trimmed; empty items are dropped. ``["a", "b"]`` -> ``"a;b;"``.
    A plain string is read as free text (see ``parse_medications``), not as characters.
    The delimiter is not escaped inside items.
    """
    if isinstance(items, str):
        items = parse_medications(items)
    out = []
    for item in items or []:
        s = str(item).strip()
        if s:
            out.append(s + MEDICATION_DELIMITER)
    return "".join(out)

def decode_medications(text: str | None) -> list[str]:
    """Split a stored medications string back into an ordered list."""
    if not text:
        return []
    return [seg for seg in text.split(MEDICATION_DELIMITER) if seg]

def parse_medications(raw: str | None) -> list[str]:
    """Turn user-entered text like ``"ibuprofen; vitamin-d"`` into a list."""
    if not raw:
        return []
    return [s.strip() for s in raw.split(MEDICATION_DELIMITER) if s.strip()]

def escape_for_storage(text: str | None) -> str:
    """
    Double single quotes so ``text`` can sit inside a quoted SQL literal.
    Only for hand-built SQL; repository statements bind parameters instead.
    """
    if text is None:
        return ""
    return str(text).replace("'", "''")

def format_date(value: date | datetime | str) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_FORMAT)
    return str(value)

def format_time(value: time | datetime | str) -> str:
    if isinstance(value, (time, datetime)):
        return value.strftime(TIME_FORMAT)
    return str(value)
