# -*- coding: utf-8 -*-
"""
exif_io：EXIF 读写适配层（Pillow 判定格式 + piexif 解析 / dump / insert）。
"""
from __future__ import annotations

from exifkit.exif_io.reader import ExifSnapshot, read_exif, to_stored_value
from exifkit.exif_io.writer import OutputDirectory, rewrite_jpeg

__all__ = [
    "ExifSnapshot",
    "read_exif",
    "to_stored_value",
    "OutputDirectory",
    "rewrite_jpeg",
]
