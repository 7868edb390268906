# -*- coding: utf-8 -*-
"""Exact fractions as stored in EXIF RATIONAL / SRATIONAL fields.

Values are kept reduced to lowest terms. When both numerator and
denominator come out negative they are folded to positive; a positive
numerator over a negative denominator is left alone (``1/-4`` stays
``1/-4``).

Ordering goes through the float quotient, so it is an approximation for
components beyond 2**53.
"""
from __future__ import annotations

import re
from math import gcd
from typing import Any

from exifkit.errors import RationalParseError

_INT_RE = re.compile(r"[+-]?\d+")


def reduce(numerator: int, denominator: int) -> tuple[int, int]:
    """Reduce ``numerator/denominator`` to lowest terms; raise on a zero denominator."""
    if denominator == 0:
        raise ZeroDivisionError(f"Rational({numerator}, 0)")
    divisor = gcd(numerator, denominator)
    n, d = numerator // divisor, denominator // divisor
    if n < 0 and d < 0:
        n, d = -n, -d
    return n, d


def _parse_int(token: str, text: str) -> int:
    token = token.strip()
    if not _INT_RE.fullmatch(token):
        raise RationalParseError(text)
    return int(token)


class Rational:
    """Immutable fraction; arithmetic returns new, reduced instances."""

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int, denominator: int = 1):
        if isinstance(numerator, bool) or not isinstance(numerator, int):
            raise TypeError(f"numerator must be int, got {type(numerator).__name__}")
        if isinstance(denominator, bool) or not isinstance(denominator, int):
            raise TypeError(f"denominator must be int, got {type(denominator).__name__}")
        self._numerator, self._denominator = reduce(numerator, denominator)

    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Parse ``"N/D"`` or ``"N"`` (denominator 1)."""
        if not isinstance(text, str):
            raise RationalParseError(text)
        if "/" in text:
            parts = text.split("/")
            if len(parts) != 2:
                raise RationalParseError(text)
            return cls(_parse_int(parts[0], text), _parse_int(parts[1], text))
        return cls(_parse_int(text, text), 1)

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def as_tuple(self) -> tuple[int, int]:
        """The ``(numerator, denominator)`` pair piexif uses for RATIONAL values."""
        return (self._numerator, self._denominator)

    # ── arithmetic ───────────────────────────────────────────────────────────

    @staticmethod
    def _coerce(other: Any) -> "Rational | None":
        if isinstance(other, Rational):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Rational(other, 1)
        return None

    def __add__(self, other: Any) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Rational(
            self._numerator * o._denominator + o._numerator * self._denominator,
            self._denominator * o._denominator,
        )

    __radd__ = __add__

    def __sub__(self, other: Any) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Rational(
            self._numerator * o._denominator - o._numerator * self._denominator,
            self._denominator * o._denominator,
        )

    def __rsub__(self, other: Any) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o - self

    def __mul__(self, other: Any) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Rational(self._numerator * o._numerator, self._denominator * o._denominator)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Rational(self._numerator * o._denominator, self._denominator * o._numerator)

    def __rtruediv__(self, other: Any) -> "Rational":
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o / self

    def increment(self) -> "Rational":
        return self + Rational(1, 1)

    def decrement(self) -> "Rational":
        return self - Rational(1, 1)

    def __pos__(self) -> "Rational":
        # Absolute value of both components, not identity.
        return Rational(abs(self._numerator), abs(self._denominator))

    def __neg__(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    # ── comparison / conversion ──────────────────────────────────────────────

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return self._numerator == other._numerator and self._denominator == other._denominator

    def __hash__(self) -> int:
        return hash((self._numerator, self._denominator))

    def _quotient_of(self, other: Any) -> float | None:
        if isinstance(other, Rational):
            return float(other)
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return float(other)
        return None

    def compare_to(self, other: "Rational") -> int:
        """-1, 0 or 1 by float quotient."""
        a, b = float(self), float(other)
        return (a > b) - (a < b)

    def __lt__(self, other: Any) -> bool:
        q = self._quotient_of(other)
        return NotImplemented if q is None else float(self) < q

    def __le__(self, other: Any) -> bool:
        q = self._quotient_of(other)
        return NotImplemented if q is None else float(self) <= q

    def __gt__(self, other: Any) -> bool:
        q = self._quotient_of(other)
        return NotImplemented if q is None else float(self) > q

    def __ge__(self, other: Any) -> bool:
        q = self._quotient_of(other)
        return NotImplemented if q is None else float(self) >= q

    def __float__(self) -> float:
        return self._numerator / self._denominator

    def __int__(self) -> int:
        q = abs(self._numerator) // abs(self._denominator)
        return q if (self._numerator < 0) == (self._denominator < 0) else -q

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __str__(self) -> str:
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"
