# -*- coding: utf-8 -*-
"""Exception classes raised by exifkit.

Everything derives from :class:`ExifKitError` so callers can catch the whole
family at once. Where a builtin exception has the same meaning the class also
inherits from it (``KeyError`` for lookups, ``TypeError`` for coercion,
``ValueError`` for fraction parsing).
"""
from __future__ import annotations

from typing import Any


class ExifKitError(Exception):
    """Base exception for all exifkit errors."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class ExifReadError(ExifKitError):
    """
    The file could not be turned into a metadata session.

    Raised when the path is unreadable, the content is not a JPEG, or the
    EXIF segment is malformed. The underlying exception is chained as
    ``__cause__`` and also kept on ``cause``.
    """

    def __init__(self, message: str = "", cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ExifWriteError(ExifKitError):
    """The pending edits could not be serialised or the file could not be replaced."""

    def __init__(self, message: str = "", cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class TagNotFoundError(ExifKitError, KeyError):
    """A binary identifier or EXIF name has no catalogue entry."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"Unsupported tag: {key!r}")

    def __str__(self) -> str:
        return self.message


class CoercionError(ExifKitError, TypeError):
    """
    A stored value cannot be presented as the requested shape.

    ``tag`` is the tag being read (may be ``None`` when decoding a bare
    value), ``shape`` the requested :class:`~exifkit.tags.ValueShape` and
    ``actual`` the type name of the stored value.
    """

    def __init__(self, tag: Any, shape: Any, actual: str, detail: str = ""):
        self.tag = tag
        self.shape = shape
        self.actual = actual
        shape_name = getattr(shape, "value", shape)
        where = f" for tag {tag}" if tag is not None else ""
        message = f"Cannot convert {actual} value{where} to {shape_name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnsupportedEncodingError(ExifKitError):
    """Only text-shaped tags can be written back to the file."""

    def __init__(self, tag: Any, shape: Any):
        self.tag = tag
        self.shape = shape
        shape_name = getattr(shape, "value", shape)
        where = f"tag {tag}" if tag is not None else "value"
        super().__init__(f"Unsupported tag type for writing: {where} has shape {shape_name}")


class RationalParseError(ExifKitError, ValueError):
    """Text is not of the form ``N/D`` or ``N``."""

    def __init__(self, text: Any):
        self.text = text
        super().__init__(f"Cannot parse {text!r} as a rational number")


class SessionClosedError(ExifKitError):
    """The session was already closed."""
