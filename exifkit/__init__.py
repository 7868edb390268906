# -*- coding: utf-8 -*-
"""
exifkit：JPEG EXIF 的类型化读写层（标签目录、值形态转换、会话读写）。

用法:
    from exifkit import Tag, open_jpeg

    with open_jpeg(path) as meta:
        meta.get_rational(Tag.X_RESOLUTION)
        meta.set(Tag.DATE_TIME_ORIGINAL, "2020:11:26 16:17:18")
"""
from __future__ import annotations

from exifkit.errors import (
    CoercionError,
    ExifKitError,
    ExifReadError,
    ExifWriteError,
    RationalParseError,
    SessionClosedError,
    TagNotFoundError,
    UnsupportedEncodingError,
)
from exifkit.number import Rational
from exifkit.session import ExifSession, open_jpeg
from exifkit.tags import Tag, TagId, ValueShape, all_tags, lookup, lookup_name

__version__ = "0.1.0"

__all__ = [
    "open_jpeg",
    "ExifSession",
    "Tag",
    "TagId",
    "ValueShape",
    "Rational",
    "all_tags",
    "lookup",
    "lookup_name",
    "ExifKitError",
    "ExifReadError",
    "ExifWriteError",
    "TagNotFoundError",
    "CoercionError",
    "UnsupportedEncodingError",
    "RationalParseError",
    "SessionClosedError",
]
