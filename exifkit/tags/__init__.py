# -*- coding: utf-8 -*-
"""
tags：标签目录（Tag）、值形态（ValueShape）以及按二进制标识 / 名称查找。
"""
from __future__ import annotations

from exifkit.tags.catalogue import (
    EXIF_IFD,
    IFD0,
    IFD1,
    INTEROP_IFD,
    READ_IFDS,
    Tag,
    TagId,
    all_tags,
    lookup,
    lookup_name,
    tags_of_shape,
)
from exifkit.tags.shapes import ValueShape

__all__ = [
    "Tag",
    "TagId",
    "ValueShape",
    "all_tags",
    "lookup",
    "lookup_name",
    "tags_of_shape",
    "READ_IFDS",
    "IFD0",
    "EXIF_IFD",
    "INTEROP_IFD",
    "IFD1",
]
