# -*- coding: utf-8 -*-
from __future__ import annotations

import os
import struct
from datetime import datetime

import pytest
from PIL import Image

from exifkit import (
    ExifWriteError,
    Rational,
    SessionClosedError,
    Tag,
    UnsupportedEncodingError,
    open_jpeg,
)


def _scan_data(data: bytes) -> bytes:
    """Bytes from the SOS marker to the end of the file."""
    pos = 2
    while data[pos:pos + 2] != b"\xff\xda":
        (length,) = struct.unpack(">H", data[pos + 2:pos + 4])
        pos += 2 + length
    return data[pos:]


def _pixels(path) -> bytes:
    with Image.open(path) as image:
        return image.tobytes()


def test_write_timestamp_is_durable(tagged_jpeg):
    with open_jpeg(tagged_jpeg) as meta:
        meta.set(Tag.DATE_TIME_ORIGINAL, "2020:11:26 16:17:18")
        assert meta.get_string(Tag.DATE_TIME_ORIGINAL) == "2020:11:26 16:17:18"

    with open_jpeg(tagged_jpeg) as meta:
        assert meta.get_string(Tag.DATE_TIME_ORIGINAL) == "2020:11:26 16:17:18"
        assert meta.get_timestamp(Tag.DATE_TIME_ORIGINAL) == datetime(2020, 11, 26, 16, 17, 18)
        assert Tag.EXIF_OFFSET in meta.as_map()
        # untouched tags survive the rewrite
        assert meta.get_rational(Tag.X_RESOLUTION) == Rational(96, 1)
        assert meta.get_byte_array(Tag.EXIF_VERSION) == b"0232"


def test_write_datetime_value(tagged_jpeg):
    with open_jpeg(tagged_jpeg) as meta:
        meta.set(Tag.DATE_TIME, datetime(2021, 5, 6, 7, 8, 9))
    with open_jpeg(tagged_jpeg) as meta:
        assert meta.get_string(Tag.DATE_TIME) == "2021:05:06 07:08:09"


def test_write_into_image_without_exif(no_exif_jpeg):
    with open_jpeg(no_exif_jpeg) as meta:
        meta.set(Tag.IMAGE_DESCRIPTION, "harbour at dusk")
        meta.set(Tag.DATE_TIME_ORIGINAL, "2019:01:02 03:04:05")
    with open_jpeg(no_exif_jpeg) as meta:
        tags = meta.as_map()
    assert tags[Tag.IMAGE_DESCRIPTION] == "harbour at dusk"
    assert tags[Tag.DATE_TIME_ORIGINAL] == "2019:01:02 03:04:05"
    assert Tag.EXIF_OFFSET in tags


def test_write_user_comment(tagged_jpeg):
    with open_jpeg(tagged_jpeg) as meta:
        meta.set(Tag.USER_COMMENT, "rolling shutter test")
    with open_jpeg(tagged_jpeg) as meta:
        assert meta.get_string(Tag.USER_COMMENT) == "rolling shutter test"
        assert meta.get_gps_text(Tag.USER_COMMENT) == "rolling shutter test"


def test_write_non_ascii_text(tagged_jpeg):
    with open_jpeg(tagged_jpeg) as meta:
        meta.set(Tag.USER_COMMENT, "港口黄昏")
        meta.set(Tag.ARTIST, "Zoë")
    with open_jpeg(tagged_jpeg) as meta:
        assert meta.get_gps_text(Tag.USER_COMMENT) == "港口黄昏"
        assert meta.get_string(Tag.ARTIST) == "Zoë"


def test_non_text_tag_rejected_at_set(tagged_jpeg):
    before = tagged_jpeg.read_bytes()
    with open_jpeg(tagged_jpeg) as meta:
        with pytest.raises(UnsupportedEncodingError) as exc:
            meta.set(Tag.ISO, "100")
        assert exc.value.tag is Tag.ISO
        assert meta.pending() == {}
    assert tagged_jpeg.read_bytes() == before


def test_non_text_tag_rejected_at_close(tagged_jpeg):
    before = tagged_jpeg.read_bytes()
    meta = open_jpeg(tagged_jpeg, settings={"validate_on_set": False})
    meta.set(Tag.ISO, "100")
    with pytest.raises(UnsupportedEncodingError):
        meta.close()
    assert meta.closed
    assert tagged_jpeg.read_bytes() == before


def test_invalid_timestamp_rejected_at_set(tagged_jpeg):
    with open_jpeg(tagged_jpeg) as meta:
        with pytest.raises(TypeError):
            meta.set(Tag.DATE_TIME_ORIGINAL, "26/11/2020")


def test_close_without_edits_leaves_file_untouched(tagged_jpeg):
    before = tagged_jpeg.read_bytes()
    mtime = os.stat(tagged_jpeg).st_mtime_ns
    meta = open_jpeg(tagged_jpeg)
    meta.get_string(Tag.DATE_TIME_ORIGINAL)
    meta.close()
    meta.close()
    assert tagged_jpeg.read_bytes() == before
    assert os.stat(tagged_jpeg).st_mtime_ns == mtime


def test_set_after_close_fails(tagged_jpeg):
    meta = open_jpeg(tagged_jpeg)
    meta.close()
    with pytest.raises(SessionClosedError):
        meta.set(Tag.ARTIST, "late")


def test_set_requires_a_tag(tagged_jpeg):
    with open_jpeg(tagged_jpeg) as meta:
        with pytest.raises(TypeError):
            meta.set("Artist", "someone")


def test_exception_in_block_discards_edits(tagged_jpeg):
    before = tagged_jpeg.read_bytes()
    with pytest.raises(RuntimeError):
        with open_jpeg(tagged_jpeg) as meta:
            meta.set(Tag.ARTIST, "never written")
            raise RuntimeError("boom")
    assert meta.closed
    assert meta.pending() == {}
    assert tagged_jpeg.read_bytes() == before


def test_pending_and_as_map(tagged_jpeg):
    with open_jpeg(tagged_jpeg) as meta:
        meta.set(Tag.ARTIST, "first")
        meta.set(Tag.ARTIST, "second")
        meta.set(Tag.DATE_TIME_ORIGINAL, "2020:11:26 16:17:18")
        assert meta.pending() == {Tag.ARTIST: "second", Tag.DATE_TIME_ORIGINAL: "2020:11:26 16:17:18"}
        assert "2 pending" in repr(meta)
        tags = meta.as_map()
        # only tags already in the file are listed, with their pending value
        assert Tag.ARTIST not in tags
        assert tags[Tag.DATE_TIME_ORIGINAL] == "2020:11:26 16:17:18"
        assert meta.get_string(Tag.ARTIST) == "second"
    with open_jpeg(tagged_jpeg) as meta:
        assert meta.get_string(Tag.ARTIST) == "second"


def test_discard(tagged_jpeg):
    before = tagged_jpeg.read_bytes()
    meta = open_jpeg(tagged_jpeg)
    meta.set(Tag.ARTIST, "dropped")
    meta.discard()
    meta.close()
    assert meta.closed
    assert tagged_jpeg.read_bytes() == before


def test_rewrite_keeps_image_data(tagged_jpeg):
    before = tagged_jpeg.read_bytes()
    pixels = _pixels(tagged_jpeg)
    with open_jpeg(tagged_jpeg) as meta:
        meta.set(Tag.IMAGE_DESCRIPTION, "x" * 300)
    after = tagged_jpeg.read_bytes()
    assert after != before
    assert _scan_data(after) == _scan_data(before)
    assert _pixels(tagged_jpeg) == pixels


def test_failed_replace_keeps_original(tagged_jpeg, monkeypatch):
    before = tagged_jpeg.read_bytes()

    def refuse(src, dst):
        raise PermissionError("read-only directory")

    monkeypatch.setattr("exifkit.exif_io.writer.os.replace", refuse)
    meta = open_jpeg(tagged_jpeg)
    meta.set(Tag.ARTIST, "someone")
    with pytest.raises(ExifWriteError) as exc:
        meta.close()
    assert isinstance(exc.value.cause, PermissionError)
    assert meta.closed
    assert tagged_jpeg.read_bytes() == before
    assert not os.path.exists(str(tagged_jpeg) + ".working")


def test_custom_temp_suffix(tagged_jpeg, monkeypatch):
    seen = []
    real_replace = os.replace

    def spy(src, dst):
        seen.append(src)
        real_replace(src, dst)

    monkeypatch.setattr("exifkit.exif_io.writer.os.replace", spy)
    with open_jpeg(tagged_jpeg, settings={"temp_suffix": ".tmp-exif"}) as meta:
        meta.set(Tag.SOFTWARE, "exifkit")
    assert seen == [str(tagged_jpeg) + ".tmp-exif"]
    with open_jpeg(tagged_jpeg) as meta:
        assert meta.get_string(Tag.SOFTWARE) == "exifkit"
