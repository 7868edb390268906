# -*- coding: utf-8 -*-
"""Value shapes: the semantic type every catalogue tag is bound to."""
from __future__ import annotations

from enum import Enum


class ValueShape(str, Enum):
    """Closed set of value shapes a tag can be read as."""

    BYTE = "Byte"
    BYTE_ARRAY = "ByteArray"
    SHORT = "Short"
    SHORT_ARRAY = "ShortArray"
    LONG = "Long"
    LONG_ARRAY = "LongArray"
    FLOAT = "Float"
    FLOAT_ARRAY = "FloatArray"
    DOUBLE = "Double"
    DOUBLE_ARRAY = "DoubleArray"
    RATIONAL = "Rational"
    RATIONAL_ARRAY = "RationalArray"
    STRING = "String"
    STRING_ARRAY = "StringArray"
    TIMESTAMP = "Timestamp"
    GPS_TEXT = "GPSText"
    UNKNOWN = "Unknown"

    @property
    def is_text(self) -> bool:
        """Shapes that can be written back to the file."""
        return self in _TEXT_SHAPES

    def __str__(self) -> str:
        return self.value


_TEXT_SHAPES = frozenset({ValueShape.STRING, ValueShape.TIMESTAMP, ValueShape.GPS_TEXT})
