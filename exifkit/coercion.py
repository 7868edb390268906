# -*- coding: utf-8 -*-
"""
Typed value coercion: stored values ⇄ shape-specific Python values.

``decode`` turns a stored value (what the reader produced or what ``set``
put into the overlay) into the representation of a :class:`ValueShape`.
``encode`` turns a value into what piexif writes for the tag's directory
entry. Both dispatch on the shape through ``DECODERS`` / ``ENCODERS``;
a shape missing from ``ENCODERS`` cannot be written.

``None`` always means "tag absent" and decodes to ``None``.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from piexif.helper import UserComment

from exifkit.errors import CoercionError, RationalParseError, UnsupportedEncodingError
from exifkit.number import Rational
from exifkit.tags import ValueShape

TIMESTAMP_FORMAT = "%Y:%m:%d %H:%M:%S"

# 8-byte character code that prefixes an EXIF UserComment.
_UNDEFINED_COMMENT_PREFIX = b"\x00" * 8
_COMMENT_PREFIX_LEN = 8

_INT_RANGES: dict[ValueShape, tuple[int, int]] = {
    ValueShape.BYTE: (0, 0xFF),
    ValueShape.SHORT: (-0x8000, 0xFFFF),
    ValueShape.LONG: (-0x80000000, 0xFFFFFFFF),
}

#: Which tag shapes each getter accepts (integer and float getters widen).
GETTER_ACCEPTS: dict[ValueShape, frozenset[ValueShape]] = {
    shape: frozenset({shape}) for shape in ValueShape
}
GETTER_ACCEPTS[ValueShape.SHORT] = frozenset({ValueShape.SHORT, ValueShape.BYTE})
GETTER_ACCEPTS[ValueShape.LONG] = frozenset({ValueShape.LONG, ValueShape.SHORT, ValueShape.BYTE})
GETTER_ACCEPTS[ValueShape.DOUBLE] = frozenset({ValueShape.DOUBLE, ValueShape.FLOAT})
GETTER_ACCEPTS[ValueShape.STRING] = frozenset(ValueShape)

Decoder = Callable[[Any, Any], Any]
Encoder = Callable[[Any, Any, str], Any]


def _fail(tag: Any, shape: ValueShape, value: Any, detail: str = "") -> CoercionError:
    return CoercionError(tag, shape, type(value).__name__, detail)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (tuple, list))


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse ``yyyy:MM:dd HH:mm:ss``; raises ``ValueError``."""
    return datetime.strptime(text.strip(), TIMESTAMP_FORMAT)


def text_form(value: Any) -> str:
    """Generic text rendering used by the String and StringArray rules."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        if all(32 <= b < 127 for b in value):
            return bytes(value).decode("ascii")
        return " ".join(str(b) for b in value)
    if _is_sequence(value):
        return " ".join(text_form(v) for v in value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)


def decode_user_comment(data: bytes) -> str:
    """Decode an EXIF UserComment (8-byte character code + payload), NULs removed."""
    data = bytes(data)
    if data[:_COMMENT_PREFIX_LEN] == _UNDEFINED_COMMENT_PREFIX:
        text = data[_COMMENT_PREFIX_LEN:].decode("utf-8", errors="replace")
    elif len(data) >= _COMMENT_PREFIX_LEN:
        try:
            text = UserComment.load(data)
        except ValueError:
            # No recognised character code: the whole field is payload.
            text = data.decode("utf-8", errors="replace")
    else:
        text = data.decode("utf-8", errors="replace")
    return text.replace("\x00", "")


# ── decoders ─────────────────────────────────────────────────────────────────


def _int_decoder(shape: ValueShape) -> Decoder:
    lo, hi = _INT_RANGES[shape]

    def decode(value: Any, tag: Any) -> int:
        # UNDEFINED fields of count 1 (FileSource) come back as a single byte;
        # every integer getter accepts Byte tags, so unwrap it for all of them.
        if isinstance(value, (bytes, bytearray)) and len(value) == 1:
            return value[0]
        if _is_int(value):
            if lo <= value <= hi:
                return value
            raise _fail(tag, shape, value, f"{value} is outside {lo}..{hi}")
        if _is_sequence(value):
            raise _fail(
                tag, shape, value,
                f"stored as a multi-value field with {len(value)} entries; get_string renders all of them",
            )
        raise _fail(tag, shape, value)

    return decode


def _int_array_decoder(shape: ValueShape, element: ValueShape) -> Decoder:
    lo, hi = _INT_RANGES[element]

    def decode(value: Any, tag: Any) -> tuple[int, ...]:
        if _is_sequence(value) and all(_is_int(v) and lo <= v <= hi for v in value):
            return tuple(value)
        raise _fail(tag, shape, value)

    return decode


def _decode_byte_array(value: Any, tag: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if _is_sequence(value) and all(_is_int(v) and 0 <= v <= 0xFF for v in value):
        return bytes(value)
    raise _fail(tag, ValueShape.BYTE_ARRAY, value)


def _float_decoder(shape: ValueShape) -> Decoder:
    def decode(value: Any, tag: Any) -> float:
        if isinstance(value, float):
            return value
        raise _fail(tag, shape, value)

    return decode


def _float_array_decoder(shape: ValueShape) -> Decoder:
    def decode(value: Any, tag: Any) -> tuple[float, ...]:
        if _is_sequence(value) and all(isinstance(v, float) for v in value):
            return tuple(value)
        raise _fail(tag, shape, value)

    return decode


def _to_rational(value: Any, tag: Any, shape: ValueShape) -> Rational:
    if isinstance(value, Rational):
        return value
    if isinstance(value, str):
        try:
            return Rational.parse(value)
        except (RationalParseError, ZeroDivisionError) as e:
            raise _fail(tag, shape, value, str(e)) from e
    raise _fail(tag, shape, value)


def _decode_rational(value: Any, tag: Any) -> Rational:
    return _to_rational(value, tag, ValueShape.RATIONAL)


def _decode_rational_array(value: Any, tag: Any) -> tuple[Rational, ...]:
    if not _is_sequence(value):
        raise _fail(tag, ValueShape.RATIONAL_ARRAY, value)
    return tuple(_to_rational(v, tag, ValueShape.RATIONAL_ARRAY) for v in value)


def _decode_string(value: Any, tag: Any) -> str:
    return text_form(value)


def _decode_string_array(value: Any, tag: Any) -> tuple[str, ...]:
    if _is_sequence(value):
        return tuple(text_form(v) for v in value)
    raise _fail(tag, ValueShape.STRING_ARRAY, value)


def _decode_timestamp(value: Any, tag: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return parse_timestamp(value)
        except ValueError as e:
            raise _fail(tag, ValueShape.TIMESTAMP, value, f"{value!r} does not match {TIMESTAMP_FORMAT}") from e
    raise _fail(tag, ValueShape.TIMESTAMP, value)


def _decode_gps_text(value: Any, tag: Any) -> str:
    if isinstance(value, str):
        return value.replace("\x00", "")
    if isinstance(value, (bytes, bytearray)):
        return decode_user_comment(value)
    raise _fail(tag, ValueShape.GPS_TEXT, value)


def _decode_unknown(value: Any, tag: Any) -> Any:
    return value


DECODERS: dict[ValueShape, Decoder] = {
    ValueShape.BYTE: _int_decoder(ValueShape.BYTE),
    ValueShape.BYTE_ARRAY: _decode_byte_array,
    ValueShape.SHORT: _int_decoder(ValueShape.SHORT),
    ValueShape.SHORT_ARRAY: _int_array_decoder(ValueShape.SHORT_ARRAY, ValueShape.SHORT),
    ValueShape.LONG: _int_decoder(ValueShape.LONG),
    ValueShape.LONG_ARRAY: _int_array_decoder(ValueShape.LONG_ARRAY, ValueShape.LONG),
    ValueShape.FLOAT: _float_decoder(ValueShape.FLOAT),
    ValueShape.FLOAT_ARRAY: _float_array_decoder(ValueShape.FLOAT_ARRAY),
    ValueShape.DOUBLE: _float_decoder(ValueShape.DOUBLE),
    ValueShape.DOUBLE_ARRAY: _float_array_decoder(ValueShape.DOUBLE_ARRAY),
    ValueShape.RATIONAL: _decode_rational,
    ValueShape.RATIONAL_ARRAY: _decode_rational_array,
    ValueShape.STRING: _decode_string,
    ValueShape.STRING_ARRAY: _decode_string_array,
    ValueShape.TIMESTAMP: _decode_timestamp,
    ValueShape.GPS_TEXT: _decode_gps_text,
    ValueShape.UNKNOWN: _decode_unknown,
}


def decode(shape: ValueShape, stored: Any, tag: Any = None) -> Any:
    """Decode ``stored`` as ``shape``; ``None`` (absent) stays ``None``."""
    if stored is None:
        return None
    return DECODERS[shape](stored, tag)


# ── encoders ─────────────────────────────────────────────────────────────────


def _encode_string(value: Any, tag: Any, encoding: str) -> bytes:
    if not isinstance(value, str):
        raise _fail(tag, ValueShape.STRING, value)
    return value.encode(encoding)


def _encode_timestamp(value: Any, tag: Any, encoding: str) -> bytes:
    if isinstance(value, datetime):
        return format_timestamp(value).encode(encoding)
    if isinstance(value, str):
        try:
            parse_timestamp(value)
        except ValueError as e:
            raise _fail(tag, ValueShape.TIMESTAMP, value, f"{value!r} does not match {TIMESTAMP_FORMAT}") from e
        return value.encode(encoding)
    raise _fail(tag, ValueShape.TIMESTAMP, value)


def _encode_gps_text(value: Any, tag: Any, encoding: str) -> bytes:
    if not isinstance(value, str):
        raise _fail(tag, ValueShape.GPS_TEXT, value)
    return UserComment.dump(value, encoding="ascii" if value.isascii() else "unicode")


ENCODERS: dict[ValueShape, Encoder] = {
    ValueShape.STRING: _encode_string,
    ValueShape.TIMESTAMP: _encode_timestamp,
    ValueShape.GPS_TEXT: _encode_gps_text,
}


def encode(shape: ValueShape, value: Any, tag: Any = None, encoding: str = "utf-8") -> Any:
    """Encode ``value`` for writing; only text shapes are supported."""
    encoder = ENCODERS.get(shape)
    if encoder is None:
        raise UnsupportedEncodingError(tag, shape)
    return encoder(value, tag, encoding)
