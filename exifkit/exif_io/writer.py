# -*- coding: utf-8 -*-
"""
EXIF 写入：在 piexif 字典上增删字段（OutputDirectory），dump 成 EXIF 段后用 piexif.insert
无损替换 JPEG 的 APP1 段，先写同目录临时文件，成功后 os.replace 覆盖原文件。
"""
from __future__ import annotations

import copy
import io
import os
import struct
from typing import Any

import piexif

from exifkit.errors import ExifWriteError
from exifkit.log import get_logger
from exifkit.tags import TagId

log = get_logger("exif_io.writer")

_IFD_NAMES = ("0th", "Exif", "GPS", "Interop", "1st")


def _empty_exif_dict() -> dict[str, Any]:
    data: dict[str, Any] = {name: {} for name in _IFD_NAMES}
    data["thumbnail"] = None
    return data


class OutputDirectory:
    """待写回的目录集合（piexif.load 的字典结构）；构造时深拷贝，不影响读取结果。"""

    def __init__(self, ifds: dict[str, Any] | None = None):
        data = _empty_exif_dict()
        if ifds:
            data.update(copy.deepcopy(ifds))
        self._data = data

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    def get_or_create_directory(self, ifd_name: str) -> dict:
        ifd = self._data.get(ifd_name)
        if not isinstance(ifd, dict):
            ifd = {}
            self._data[ifd_name] = ifd
        return ifd

    def get_field(self, tag_id: TagId) -> Any:
        ifd = self._data.get(tag_id.ifd)
        if not isinstance(ifd, dict):
            return None
        return ifd.get(tag_id.number)

    def remove_field(self, tag_id: TagId) -> None:
        ifd = self._data.get(tag_id.ifd)
        if isinstance(ifd, dict):
            ifd.pop(tag_id.number, None)

    def add_field(self, tag_id: TagId, encoded: Any) -> None:
        self.get_or_create_directory(tag_id.ifd)[tag_id.number] = encoded

    def dump(self) -> bytes:
        """序列化为 EXIF 段（b"Exif\\x00\\x00" 开头）。"""
        try:
            return piexif.dump(self._data)
        except (ValueError, KeyError, TypeError, struct.error) as e:
            raise ExifWriteError(f"Cannot serialise EXIF directory: {e}", e) from e


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except OSError:
        pass


def rewrite_jpeg(path: str | os.PathLike, directory: OutputDirectory, temp_suffix: str = ".working") -> None:
    """
    无损改写 JPEG 的 EXIF 段。

    只替换 APP1/EXIF 段，像素数据与其它段保持原样。任一步失败都会删除临时文件并抛 ExifWriteError，
    原文件保持不变。
    """
    path = os.fspath(path)
    exif_bytes = directory.dump()
    try:
        with open(path, "rb") as f:
            source = f.read()
    except OSError as e:
        raise ExifWriteError(f"Cannot read {path}: {e}", e) from e

    out = io.BytesIO()
    try:
        piexif.insert(exif_bytes, source, out)
    except ValueError as e:
        raise ExifWriteError(f"Cannot insert EXIF into {path}: {e}", e) from e

    tmp_path = path + temp_suffix
    try:
        with open(tmp_path, "wb") as f:
            f.write(out.getvalue())
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        _discard(tmp_path)
        raise ExifWriteError(f"Cannot replace {path}: {e}", e) from e
    log.info("rewrote EXIF of %s (%d bytes)", path, len(exif_bytes))
