"""
Type Probe - runtime classification of candidate values

Validators accept anything: form fields, decoded JSON, arbitrary objects.
Before deciding whether a rule applies, each validator asks the probe what
kind of value it was handed and then dispatches on the answer. Values of a
kind a rule does not understand are simply unsatisfied.

Classification order matters:
- bool is checked before int (True is an int in Python, but never here)
- str is checked before Sequence (str is a Sequence of characters)
- datetime is a date subclass, both count as timestamps
"""

import datetime
from collections.abc import Mapping, Sequence
from enum import Enum
from numbers import Number
from typing import Any, Optional


class ValueKind(Enum):
    """Kinds of value a validator can be handed."""

    ABSENT = "absent"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    TIMESTAMP = "timestamp"
    OTHER = "other"


def probe(value: Any) -> ValueKind:
    """Classify a value. Never raises."""
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, Number):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, Sequence):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, datetime.date):
        return ValueKind.TIMESTAMP
    return ValueKind.OTHER


def size_of(value: Any) -> Optional[int]:
    """
    Measure a sized value.

    Text is sized in code points, so a multi-byte character counts once.
    Sequences are sized by element count.

    Returns:
        The size, or None if the value is neither text nor a sequence
    """
    if probe(value) in (ValueKind.TEXT, ValueKind.SEQUENCE):
        return len(value)
    return None


def _is_zero_timestamp(value: datetime.date) -> bool:
    # The canonical unset instant is the first representable one; tzinfo is ignored
    if isinstance(value, datetime.datetime):
        return value.replace(tzinfo=None) == datetime.datetime.min
    return value == datetime.date.min


def is_zero_value(value: Any) -> bool:
    """
    Check whether a value is the zero value of its own type.

    Zero values are None, False, numeric zero, empty text, empty
    sequences and mappings, and the zero timestamp. Any other value,
    including functions and opaque objects, is non-zero.
    """
    kind = probe(value)
    if kind is ValueKind.ABSENT:
        return True
    if kind is ValueKind.BOOLEAN:
        return value is False
    if kind in (ValueKind.INTEGER, ValueKind.NUMBER):
        try:
            return value == 0
        except ArithmeticError:
            # signalling NaN refuses comparison; it is still a provided value
            return False
    if kind in (ValueKind.TEXT, ValueKind.SEQUENCE, ValueKind.MAPPING):
        return len(value) == 0
    if kind is ValueKind.TIMESTAMP:
        return _is_zero_timestamp(value)
    return False
