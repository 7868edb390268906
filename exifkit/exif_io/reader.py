# -*- coding: utf-8 -*-
"""
EXIF 读取：Pillow 判定容器格式（只接受 JPEG），piexif 解析 APP1/EXIF 段。

piexif 返回的原始值按 TIFF 字段类型规整为会话使用的“存储值”：
ASCII → str（去掉尾部 NUL），RATIONAL/SRATIONAL → Rational（分母为 0 时保留原始 (n, d)），
其余（int / tuple / bytes / float）原样保留。
"""
from __future__ import annotations

import io
import os
import struct
from dataclasses import dataclass, field
from typing import Any

import piexif
from PIL import Image, UnidentifiedImageError

from exifkit.errors import ExifReadError
from exifkit.log import get_logger
from exifkit.number import Rational
from exifkit.tags import READ_IFDS, TagId

log = get_logger("exif_io.reader")

# MPO 是带多帧附加数据的 JPEG（多数相机直出），同样按 JPEG 处理
_JPEG_FORMATS = frozenset({"JPEG", "MPO"})
_RATIONAL_TYPES = frozenset({piexif.TYPES.Rational, piexif.TYPES.SRational})


@dataclass
class ExifSnapshot:
    """一次读取的结果：原始 piexif 字典（写回时复用）+ 规整后的条目。"""

    path: str
    ifds: dict[str, Any]
    entries: dict[TagId, Any] = field(default_factory=dict)

    @property
    def has_exif(self) -> bool:
        return bool(self.entries)


def _field_type(ifd_name: str, tag_number: int) -> int | None:
    info = piexif.TAGS.get(ifd_name, {}).get(tag_number)
    if not isinstance(info, dict):
        return None
    return info.get("type")


def _rational_or_raw(pair: Any) -> Any:
    num, den = pair[0], pair[1]
    if den == 0:
        log.debug("rational with zero denominator kept raw: %s/%s", num, den)
        return (num, den)
    return Rational(num, den)


def _decode_ascii(value: Any, encoding: str) -> Any:
    if isinstance(value, (bytes, bytearray)):
        try:
            text = bytes(value).decode(encoding)
        except UnicodeDecodeError:
            text = bytes(value).decode("latin1")
        return text.rstrip("\x00")
    if isinstance(value, str):
        return value.rstrip("\x00")
    return value


def to_stored_value(value: Any, field_type: int | None, encoding: str = "utf-8") -> Any:
    """把 piexif 的原始值规整为存储值（见模块说明）。"""
    if field_type == piexif.TYPES.Ascii:
        return _decode_ascii(value, encoding)
    if field_type in _RATIONAL_TYPES and isinstance(value, tuple) and value:
        if isinstance(value[0], tuple):
            return tuple(_rational_or_raw(p) for p in value)
        if len(value) == 2:
            return _rational_or_raw(value)
    return value


def _read_bytes(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ExifReadError(f"Cannot read {path}: {e}", e) from e


def _check_jpeg(path: str, data: bytes) -> None:
    try:
        with Image.open(io.BytesIO(data)) as image:
            fmt = image.format
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ExifReadError(f"{path} is not a readable image: {e}", e) from e
    if fmt not in _JPEG_FORMATS:
        raise ExifReadError(f"{path} is not a JPEG image (format: {fmt})")


def read_exif(path: str | os.PathLike, encoding: str = "utf-8") -> ExifSnapshot:
    """
    读取单个 JPEG 的 EXIF。

    无 EXIF 段的 JPEG 返回空条目而不是报错；不可读 / 非 JPEG / EXIF 结构损坏时抛 ExifReadError。
    只读取 READ_IFDS（0th / Exif / Interop / 1st），不解析 GPS 子目录。
    """
    path = os.fspath(path)
    data = _read_bytes(path)
    _check_jpeg(path, data)
    try:
        ifds = piexif.load(data)
    except (ValueError, struct.error, IndexError, KeyError) as e:
        raise ExifReadError(f"Malformed EXIF data in {path}: {e}", e) from e

    entries: dict[TagId, Any] = {}
    for ifd_name in READ_IFDS:
        ifd = ifds.get(ifd_name)
        if not isinstance(ifd, dict):
            continue
        for tag_number, value in ifd.items():
            entries[TagId(ifd_name, tag_number)] = to_stored_value(value, _field_type(ifd_name, tag_number), encoding)
    log.debug("read %d EXIF entries from %s", len(entries), path)
    return ExifSnapshot(path=path, ifds=ifds, entries=entries)
