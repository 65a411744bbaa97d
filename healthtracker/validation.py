"""Pure checks and normalisation for the raw strings the UI collects.

Nothing in here touches the database; every failure is raised before a
store call is made.
"""

import csv
import io
import math
from dataclasses import dataclass

from healthtracker.errors import EmptyRecord, InvalidInput, InvalidNumber, NoteTooLong

NOTE_WORD_LIMIT = 50

EXPORT_HEADER = 'id,date,weight,temperature,blood_pressure,note'


@dataclass(frozen=True)
class RecordValues:
    weight: float
    temperature: float
    blood_pressure: str
    note: str


def is_blank(text):
    return text is None or not text.strip()


def require_fields(**fields):
    """Raise InvalidInput naming every blank keyword argument."""
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise InvalidInput(missing)


def parse_number(text, field, fallback=0.0):
    """Parse a numeric form field.

    Blank input gives ``fallback`` (0.0 when creating, the stored value when
    editing). Anything else must be a finite float.
    """
    if is_blank(text):
        return fallback
    try:
        value = float(text.strip())
    except ValueError:
        raise InvalidNumber(field, text) from None
    if not math.isfinite(value):
        raise InvalidNumber(field, text)
    return value


def count_words(note):
    return len(note.split()) if note else 0


def check_note(note):
    words = count_words(note)
    if words > NOTE_WORD_LIMIT:
        raise NoteTooLong(words, NOTE_WORD_LIMIT)


def check_any_filled(weight_text, temperature_text, blood_pressure, note):
    if all(is_blank(value) for value in (weight_text, temperature_text, blood_pressure, note)):
        raise EmptyRecord()


def parse_new_record(weight_text, temperature_text, blood_pressure, note):
    check_any_filled(weight_text, temperature_text, blood_pressure, note)
    weight = parse_number(weight_text, 'weight')
    temperature = parse_number(temperature_text, 'temperature')
    check_note(note)
    return RecordValues(
        weight=weight,
        temperature=temperature,
        blood_pressure='' if is_blank(blood_pressure) else blood_pressure,
        note='' if is_blank(note) else note,
    )


def parse_record_edit(previous, weight_text, temperature_text, blood_pressure, note):
    """Merge edit-form input over ``previous``; each blank field keeps its old value."""
    check_any_filled(weight_text, temperature_text, blood_pressure, note)
    weight = parse_number(weight_text, 'weight', fallback=previous.weight)
    temperature = parse_number(temperature_text, 'temperature', fallback=previous.temperature)
    if not is_blank(note):
        check_note(note)
    return RecordValues(
        weight=weight,
        temperature=temperature,
        blood_pressure=previous.blood_pressure if is_blank(blood_pressure) else blood_pressure,
        note=previous.note if is_blank(note) else note,
    )


def format_record(record):
    """Render one record as a single CSV line (no trailing newline)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='')
    writer.writerow([
        record.id,
        record.date.isoformat() if record.date else '',
        record.weight,
        record.temperature,
        record.blood_pressure,
        # newlines inside a note would split the export line
        ' '.join(record.note.splitlines()) if record.note else '',
    ])
    return buffer.getvalue()
