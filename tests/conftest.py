# -*- coding: utf-8 -*-
"""Fixture images are generated per test with Pillow + piexif."""
from __future__ import annotations

from pathlib import Path

import piexif
import pytest
from PIL import Image

from exifkit import ValueShape

# EXIF content of the "tagged" fixture, as piexif writes it.
TAGGED_EXIF = {
    "0th": {
        piexif.ImageIFD.XResolution: (96, 1),
        piexif.ImageIFD.YResolution: (96, 1),
        piexif.ImageIFD.ResolutionUnit: 2,
        piexif.ImageIFD.YCbCrPositioning: 1,
    },
    "Exif": {
        piexif.ExifIFD.ExifVersion: b"0232",
        piexif.ExifIFD.DateTimeOriginal: b"2020:11:26 12:13:14",
        piexif.ExifIFD.ComponentsConfiguration: b"\x01\x02\x03\x00",
        piexif.ExifIFD.FlashpixVersion: b"0100",
        piexif.ExifIFD.ColorSpace: 65535,
    },
    "GPS": {},
    "Interop": {},
    "1st": {},
    "thumbnail": None,
}

SHAPE_GETTERS = {
    ValueShape.BYTE: "get_byte",
    ValueShape.BYTE_ARRAY: "get_byte_array",
    ValueShape.SHORT: "get_short",
    ValueShape.SHORT_ARRAY: "get_short_array",
    ValueShape.LONG: "get_long",
    ValueShape.LONG_ARRAY: "get_long_array",
    ValueShape.FLOAT: "get_float",
    ValueShape.FLOAT_ARRAY: "get_float_array",
    ValueShape.DOUBLE: "get_double",
    ValueShape.DOUBLE_ARRAY: "get_double_array",
    ValueShape.RATIONAL: "get_rational",
    ValueShape.RATIONAL_ARRAY: "get_rational_array",
    ValueShape.STRING: "get_string",
    ValueShape.STRING_ARRAY: "get_string_array",
    ValueShape.TIMESTAMP: "get_timestamp",
    ValueShape.GPS_TEXT: "get_gps_text",
    ValueShape.UNKNOWN: "get_unknown",
}


def make_jpeg(path: Path, exif: dict | None = None, color: str = "steelblue") -> Path:
    image = Image.new("RGB", (32, 24), color)
    if exif is None:
        image.save(path, "JPEG", quality=90)
    else:
        image.save(path, "JPEG", quality=90, exif=piexif.dump(exif))
    return path


@pytest.fixture
def no_exif_jpeg(tmp_path: Path) -> Path:
    return make_jpeg(tmp_path / "0000.jpg")


@pytest.fixture
def tagged_jpeg(tmp_path: Path) -> Path:
    return make_jpeg(tmp_path / "0001.jpg", TAGGED_EXIF)


@pytest.fixture
def uncatalogued_jpeg(tmp_path: Path) -> Path:
    exif = {
        "0th": {piexif.ImageIFD.Make: b"Quakbo"},
        "Exif": {piexif.ExifIFD.ImageUniqueID: b"0123456789abcdef"},
    }
    return make_jpeg(tmp_path / "0002.jpg", exif)
