# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from exifkit import Tag, TagId, TagNotFoundError, ValueShape, all_tags, lookup, lookup_name
from exifkit.tags import READ_IFDS, tags_of_shape


def test_identifiers_are_unique():
    ids = [t.tag_id for t in all_tags()]
    assert len(ids) == len(set(ids))


def test_names_are_unique():
    names = [t.exif_name for t in all_tags()]
    assert len(names) == len(set(names))


@pytest.mark.parametrize("tag", all_tags(), ids=str)
def test_lookup_round_trip(tag):
    assert lookup(tag.tag_id) is tag
    assert lookup((tag.ifd, tag.number)) is tag
    assert lookup_name(tag.exif_name) is tag


@pytest.mark.parametrize("tag", all_tags(), ids=str)
def test_every_tag_lives_in_a_read_directory(tag):
    assert tag.ifd in READ_IFDS
    assert isinstance(tag.shape, ValueShape)


@pytest.mark.parametrize("key", [("Exif", 99999), ("GPS", 2), TagId("1st", 282), "Exif", None, 42])
def test_lookup_unknown_identifier_fails(key):
    with pytest.raises(TagNotFoundError):
        lookup(key)


def test_not_found_is_a_key_error():
    with pytest.raises(KeyError):
        lookup(("0th", 1))


def test_lookup_name_aliases():
    assert lookup_name("PhotographicSensitivity") is Tag.ISO
    assert lookup_name("ISOSpeedRatings") is Tag.ISO
    with pytest.raises(TagNotFoundError):
        lookup_name("NoSuchTag")


def test_tag_attributes():
    tag = Tag.DATE_TIME_ORIGINAL
    assert tag.tag_id == TagId("Exif", 36867)
    assert tag.shape is ValueShape.TIMESTAMP
    assert str(tag) == "DateTimeOriginal"
    assert str(tag.tag_id) == "Exif:36867"


def test_text_shapes():
    assert ValueShape.STRING.is_text
    assert ValueShape.TIMESTAMP.is_text
    assert ValueShape.GPS_TEXT.is_text
    assert not ValueShape.SHORT.is_text
    assert not ValueShape.RATIONAL.is_text


def test_tags_of_shape():
    timestamps = tags_of_shape(ValueShape.TIMESTAMP)
    assert set(timestamps) == {Tag.DATE_TIME, Tag.DATE_TIME_ORIGINAL, Tag.DATE_TIME_DIGITIZED}
    assert Tag.UNKNOWN in tags_of_shape(ValueShape.UNKNOWN)
