# -*- coding: utf-8 -*-
"""Numeric types used by EXIF values."""
from __future__ import annotations

from exifkit.number.rational import Rational, reduce

__all__ = ["Rational", "reduce"]
