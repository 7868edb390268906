# -*- coding: utf-8 -*-
"""
Metadata session bound to one JPEG file.

Usage::
    from exifkit import Tag, open_jpeg

    with open_jpeg("IMG_0001.jpg") as meta:
        taken = meta.get_timestamp(Tag.DATE_TIME_ORIGINAL)
        meta.set(Tag.IMAGE_DESCRIPTION, "harbour at dusk")
    # leaving the block rewrites the file (only if something was set)

Reads resolve from the pending overlay first, then from what was on disk
when the session was opened. ``set`` only touches the overlay; ``close``
encodes the overlay into the file's EXIF directories and rewrites the file.
"""
from __future__ import annotations

import os
from datetime import datetime
from typing import Any

from exifkit import coercion
from exifkit.config import resolve_settings
from exifkit.errors import CoercionError, SessionClosedError, TagNotFoundError
from exifkit.exif_io import OutputDirectory, read_exif, rewrite_jpeg
from exifkit.log import get_logger
from exifkit.number import Rational
from exifkit.tags import Tag, ValueShape, lookup

log = get_logger("session")


class ExifSession:
    """Typed read / pending write access to the EXIF metadata of one JPEG."""

    def __init__(self, path: str | os.PathLike, settings: dict[str, Any] | None = None):
        self._path = os.fspath(path)
        self._settings = resolve_settings(settings)
        self._snapshot = read_exif(self._path, encoding=self._settings["text_encoding"])
        self._base: dict[Tag, Any] = {}
        self._unknown_ids = []
        for tag_id, value in self._snapshot.entries.items():
            try:
                self._base[lookup(tag_id)] = value
            except TagNotFoundError:
                self._unknown_ids.append(tag_id)
        self._overlay: dict[Tag, Any] = {}
        self._closed = False
        if not self._snapshot.has_exif:
            log.debug("opened %s: no EXIF segment", self._path)
        else:
            log.debug(
                "opened %s: %d catalogued entries, %d uncatalogued",
                self._path, len(self._base), len(self._unknown_ids),
            )

    # ── state ────────────────────────────────────────────────────────────────

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def settings(self) -> dict[str, Any]:
        return dict(self._settings)

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"{len(self._overlay)} pending"
        return f"<ExifSession {self._path!r} ({state})>"

    # ── reads ────────────────────────────────────────────────────────────────

    def get(self, tag: Tag) -> Any:
        """Stored value for ``tag``: pending overlay first, then the file; ``None`` if absent."""
        if tag in self._overlay:
            return self._overlay[tag]
        return self._base.get(tag)

    def _get_as(self, tag: Tag, shape: ValueShape) -> Any:
        stored = self.get(tag)
        if tag.shape not in coercion.GETTER_ACCEPTS[shape]:
            actual = "absent" if stored is None else type(stored).__name__
            raise CoercionError(tag, shape, actual, f"{tag} is a {tag.shape} tag")
        return coercion.decode(shape, stored, tag)

    def get_byte(self, tag: Tag) -> int | None:
        return self._get_as(tag, ValueShape.BYTE)

    def get_byte_array(self, tag: Tag) -> bytes | None:
        return self._get_as(tag, ValueShape.BYTE_ARRAY)

    def get_short(self, tag: Tag) -> int | None:
        return self._get_as(tag, ValueShape.SHORT)

    def get_short_array(self, tag: Tag) -> tuple[int, ...] | None:
        return self._get_as(tag, ValueShape.SHORT_ARRAY)

    def get_long(self, tag: Tag) -> int | None:
        """Long tags, and Short / Byte tags widened to Long."""
        return self._get_as(tag, ValueShape.LONG)

    def get_long_array(self, tag: Tag) -> tuple[int, ...] | None:
        return self._get_as(tag, ValueShape.LONG_ARRAY)

    def get_float(self, tag: Tag) -> float | None:
        return self._get_as(tag, ValueShape.FLOAT)

    def get_float_array(self, tag: Tag) -> tuple[float, ...] | None:
        return self._get_as(tag, ValueShape.FLOAT_ARRAY)

    def get_double(self, tag: Tag) -> float | None:
        return self._get_as(tag, ValueShape.DOUBLE)

    def get_double_array(self, tag: Tag) -> tuple[float, ...] | None:
        return self._get_as(tag, ValueShape.DOUBLE_ARRAY)

    def get_rational(self, tag: Tag) -> Rational | None:
        return self._get_as(tag, ValueShape.RATIONAL)

    def get_rational_array(self, tag: Tag) -> tuple[Rational, ...] | None:
        return self._get_as(tag, ValueShape.RATIONAL_ARRAY)

    def get_string(self, tag: Tag) -> str | None:
        """
        Any tag rendered as text.

        Rationals render as ``"N/D"``, timestamps as ``yyyy:MM:dd HH:mm:ss``;
        user-comment style tags have their character-code header and NUL
        padding removed.
        """
        if tag.shape is ValueShape.GPS_TEXT:
            return self._get_as(tag, ValueShape.GPS_TEXT)
        return self._get_as(tag, ValueShape.STRING)

    def get_string_array(self, tag: Tag) -> tuple[str, ...] | None:
        return self._get_as(tag, ValueShape.STRING_ARRAY)

    def get_timestamp(self, tag: Tag) -> datetime | None:
        return self._get_as(tag, ValueShape.TIMESTAMP)

    def get_gps_text(self, tag: Tag) -> str | None:
        return self._get_as(tag, ValueShape.GPS_TEXT)

    def get_unknown(self, tag: Tag) -> Any:
        return self._get_as(tag, ValueShape.UNKNOWN)

    def as_map(self) -> dict[Tag, Any]:
        """
        Every tag present in the file, with its current (overlay-first) value.

        Tags that only exist as pending edits are not included; use
        :meth:`pending` for those. Identifiers outside the catalogue are
        skipped unless ``skip_unknown_tags`` is off, in which case the first
        one raises :class:`TagNotFoundError`.
        """
        if self._unknown_ids and not self._settings["skip_unknown_tags"]:
            raise TagNotFoundError(self._unknown_ids[0])
        for tag_id in self._unknown_ids:
            log.debug("as_map: skipping uncatalogued %s", tag_id)
        return {tag: self.get(tag) for tag in self._base}

    def pending(self) -> dict[Tag, Any]:
        """Edits made with :meth:`set` that have not been written yet."""
        return dict(self._overlay)

    # ── writes ───────────────────────────────────────────────────────────────

    def set(self, tag: Tag, value: Any) -> None:
        """
        Stage ``value`` for ``tag``; replaces an earlier pending value.

        With ``validate_on_set`` (the default) the value is encoded right away,
        so non-text tags raise :class:`UnsupportedEncodingError` here instead
        of at :meth:`close`.
        """
        if self._closed:
            raise SessionClosedError(f"session for {self._path} is closed")
        if not isinstance(tag, Tag):
            raise TypeError(f"tag must be a Tag, got {type(tag).__name__}")
        if self._settings["validate_on_set"]:
            coercion.encode(tag.shape, value, tag, self._settings["text_encoding"])
        self._overlay[tag] = value

    def _build_output_directory(self) -> OutputDirectory:
        directory = OutputDirectory(self._snapshot.ifds)
        encoding = self._settings["text_encoding"]
        for tag, value in self._overlay.items():
            encoded = coercion.encode(tag.shape, value, tag, encoding)
            directory.remove_field(tag.tag_id)
            directory.add_field(tag.tag_id, encoded)
        return directory

    def close(self) -> None:
        """
        Write pending edits and end the session.

        A second call does nothing. Without pending edits the file is left
        untouched. The session counts as closed even if the write fails.
        """
        if self._closed:
            return
        try:
            if not self._overlay:
                log.debug("close %s: nothing to write", self._path)
                return
            directory = self._build_output_directory()
            rewrite_jpeg(self._path, directory, temp_suffix=self._settings["temp_suffix"])
        finally:
            self._closed = True

    def discard(self) -> None:
        """End the session without writing pending edits."""
        if self._overlay:
            log.info("discarding %d pending edits for %s", len(self._overlay), self._path)
        self._overlay.clear()
        self._closed = True

    def __enter__(self) -> "ExifSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.discard()
            return
        self.close()


def open_jpeg(path: str | os.PathLike, settings: dict[str, Any] | None = None) -> ExifSession:
    """Open ``path`` and read its EXIF metadata; raises :class:`ExifReadError` on failure."""
    return ExifSession(path, settings)
