# -*- coding: utf-8 -*-
"""
The closed catalogue of EXIF tags exifkit knows how to read.

Every tag is bound to exactly one :class:`ValueShape` and one binary
identifier ``(ifd, number)``. ``ifd`` uses the directory keys of the dict
returned by ``piexif.load`` (``"0th"``, ``"Exif"``, ``"Interop"``, ``"1st"``).
The identifier is the enum value, so ``enum.unique`` refuses to import a
catalogue in which two tags share an identifier.
"""
from __future__ import annotations

from enum import Enum, unique
from typing import Any, NamedTuple

from exifkit.errors import TagNotFoundError
from exifkit.tags.shapes import ValueShape

IFD0 = "0th"
EXIF_IFD = "Exif"
INTEROP_IFD = "Interop"
IFD1 = "1st"

#: Directories read into a session; the GPS directory is not decoded.
READ_IFDS: tuple[str, ...] = (IFD0, EXIF_IFD, INTEROP_IFD, IFD1)

_S = ValueShape


class TagId(NamedTuple):
    ifd: str
    number: int

    def __str__(self) -> str:
        return f"{self.ifd}:{self.number}"


@unique
class Tag(Enum):
    """One member per supported tag: ``(ifd, number, shape, exif_name)``."""

    # IFD0
    IMAGE_DESCRIPTION = (IFD0, 270, _S.STRING, "ImageDescription")
    MAKE = (IFD0, 271, _S.STRING, "Make")
    MODEL = (IFD0, 272, _S.STRING, "Model")
    ORIENTATION = (IFD0, 274, _S.SHORT, "Orientation")
    X_RESOLUTION = (IFD0, 282, _S.RATIONAL, "XResolution")
    Y_RESOLUTION = (IFD0, 283, _S.RATIONAL, "YResolution")
    RESOLUTION_UNIT = (IFD0, 296, _S.SHORT, "ResolutionUnit")
    COMPRESSION = (IFD0, 259, _S.SHORT, "Compression")
    SOFTWARE = (IFD0, 305, _S.STRING, "Software")
    DATE_TIME = (IFD0, 306, _S.TIMESTAMP, "DateTime")
    ARTIST = (IFD0, 315, _S.STRING, "Artist")
    Y_CB_CR_POSITIONING = (IFD0, 531, _S.SHORT, "YCbCrPositioning")
    RATING = (IFD0, 18246, _S.SHORT, "Rating")
    RATING_PERCENT = (IFD0, 18249, _S.SHORT, "RatingPercent")
    COPYRIGHT = (IFD0, 33432, _S.STRING, "Copyright")
    EXIF_OFFSET = (IFD0, 34665, _S.LONG, "ExifOffset")
    GPS_INFO = (IFD0, 34853, _S.LONG, "GPSInfo")

    # Exif sub-IFD
    EXPOSURE_TIME = (EXIF_IFD, 33434, _S.RATIONAL, "ExposureTime")
    F_NUMBER = (EXIF_IFD, 33437, _S.RATIONAL, "FNumber")
    EXPOSURE_PROGRAM = (EXIF_IFD, 34850, _S.SHORT, "ExposureProgram")
    ISO = (EXIF_IFD, 34855, _S.SHORT, "ISO")
    EXIF_VERSION = (EXIF_IFD, 36864, _S.BYTE_ARRAY, "ExifVersion")
    DATE_TIME_ORIGINAL = (EXIF_IFD, 36867, _S.TIMESTAMP, "DateTimeOriginal")
    DATE_TIME_DIGITIZED = (EXIF_IFD, 36868, _S.TIMESTAMP, "DateTimeDigitized")
    COMPONENTS_CONFIGURATION = (EXIF_IFD, 37121, _S.BYTE_ARRAY, "ComponentsConfiguration")
    COMPRESSED_BITS_PER_PIXEL = (EXIF_IFD, 37122, _S.RATIONAL, "CompressedBitsPerPixel")
    SHUTTER_SPEED_VALUE = (EXIF_IFD, 37377, _S.RATIONAL, "ShutterSpeedValue")
    APERTURE_VALUE = (EXIF_IFD, 37378, _S.RATIONAL, "ApertureValue")
    EXPOSURE_COMPENSATION = (EXIF_IFD, 37380, _S.RATIONAL, "ExposureCompensation")
    MAX_APERTURE_VALUE = (EXIF_IFD, 37381, _S.RATIONAL, "MaxApertureValue")
    METERING_MODE = (EXIF_IFD, 37383, _S.SHORT, "MeteringMode")
    FLASH = (EXIF_IFD, 37385, _S.SHORT, "Flash")
    FOCAL_LENGTH = (EXIF_IFD, 37386, _S.RATIONAL, "FocalLength")
    MAKER_NOTE = (EXIF_IFD, 37500, _S.BYTE_ARRAY, "MakerNote")
    USER_COMMENT = (EXIF_IFD, 37510, _S.GPS_TEXT, "UserComment")
    SUB_SEC_TIME = (EXIF_IFD, 37520, _S.STRING, "SubSecTime")
    SUB_SEC_TIME_ORIGINAL = (EXIF_IFD, 37521, _S.STRING, "SubSecTimeOriginal")
    SUB_SEC_TIME_DIGITIZED = (EXIF_IFD, 37522, _S.STRING, "SubSecTimeDigitized")
    FLASHPIX_VERSION = (EXIF_IFD, 40960, _S.BYTE_ARRAY, "FlashpixVersion")
    COLOR_SPACE = (EXIF_IFD, 40961, _S.SHORT, "ColorSpace")
    EXIF_IMAGE_WIDTH = (EXIF_IFD, 40962, _S.LONG, "ExifImageWidth")
    EXIF_IMAGE_LENGTH = (EXIF_IFD, 40963, _S.LONG, "ExifImageLength")
    INTEROP_OFFSET = (EXIF_IFD, 40965, _S.LONG, "InteropOffset")
    FOCAL_PLANE_X_RESOLUTION = (EXIF_IFD, 41486, _S.RATIONAL, "FocalPlaneXResolution")
    FOCAL_PLANE_Y_RESOLUTION = (EXIF_IFD, 41487, _S.RATIONAL, "FocalPlaneYResolution")
    FOCAL_PLANE_RESOLUTION_UNIT = (EXIF_IFD, 41488, _S.SHORT, "FocalPlaneResolutionUnit")
    SENSING_METHOD = (EXIF_IFD, 41495, _S.SHORT, "SensingMethod")
    FILE_SOURCE = (EXIF_IFD, 41728, _S.BYTE, "FileSource")
    CUSTOM_RENDERED = (EXIF_IFD, 41985, _S.SHORT, "CustomRendered")
    EXPOSURE_MODE = (EXIF_IFD, 41986, _S.SHORT, "ExposureMode")
    WHITE_BALANCE = (EXIF_IFD, 41987, _S.SHORT, "WhiteBalance")
    DIGITAL_ZOOM_RATIO = (EXIF_IFD, 41988, _S.RATIONAL, "DigitalZoomRatio")
    SCENE_CAPTURE_TYPE = (EXIF_IFD, 41990, _S.SHORT, "SceneCaptureType")
    CAMERA_OWNER_NAME = (EXIF_IFD, 42032, _S.STRING, "CameraOwnerName")
    BODY_SERIAL_NUMBER = (EXIF_IFD, 42033, _S.STRING, "BodySerialNumber")
    LENS_SPECIFICATION = (EXIF_IFD, 42034, _S.RATIONAL_ARRAY, "LensSpecification")
    LENS_MAKE = (EXIF_IFD, 42035, _S.STRING, "LensMake")
    LENS_MODEL = (EXIF_IFD, 42036, _S.STRING, "LensModel")

    # Interoperability IFD
    INTEROPERABILITY_INDEX = (INTEROP_IFD, 1, _S.STRING, "InteroperabilityIndex")
    INTEROPERABILITY_VERSION = (INTEROP_IFD, 2, _S.BYTE_ARRAY, "InteroperabilityVersion")
    RELATED_IMAGE_WIDTH = (INTEROP_IFD, 4097, _S.LONG, "RelatedImageWidth")
    RELATED_IMAGE_LENGTH = (INTEROP_IFD, 4098, _S.LONG, "RelatedImageLength")

    # IFD1 (thumbnail)
    THUMBNAIL_OFFSET = (IFD1, 513, _S.LONG, "ThumbnailOffset")
    THUMBNAIL_LENGTH = (IFD1, 514, _S.LONG, "ThumbnailLength")

    # Never present in a file; stands in for opaque values.
    UNKNOWN = (IFD0, -1, _S.UNKNOWN, "Unknown")

    def __new__(cls, ifd: str, number: int, shape: ValueShape, exif_name: str):
        obj = object.__new__(cls)
        obj._value_ = TagId(ifd, number)
        obj.ifd = ifd
        obj.number = number
        obj.shape = shape
        obj.exif_name = exif_name
        return obj

    @property
    def tag_id(self) -> TagId:
        return self.value

    def __str__(self) -> str:
        return self.exif_name


_ALL_TAGS: tuple[Tag, ...] = tuple(Tag)
_BY_NAME: dict[str, Tag] = {t.exif_name: t for t in _ALL_TAGS}
# EXIF 2.3 renamed ISOSpeedRatings; both names resolve to the same field.
_BY_NAME.update({
    "PhotographicSensitivity": Tag.ISO,
    "ISOSpeedRatings": Tag.ISO,
})


def lookup(tag_id: Any) -> Tag:
    """Catalogue entry for ``(ifd, number)``; raise :class:`TagNotFoundError` if there is none."""
    try:
        key = TagId(*tag_id)
    except (TypeError, ValueError):
        raise TagNotFoundError(tag_id) from None
    try:
        return Tag(key)
    except ValueError:
        raise TagNotFoundError(key) from None


def lookup_name(name: str) -> Tag:
    """Catalogue entry by EXIF name (``"DateTimeOriginal"``)."""
    tag = _BY_NAME.get(str(name or "").strip())
    if tag is None:
        raise TagNotFoundError(name)
    return tag


def all_tags() -> tuple[Tag, ...]:
    """Every catalogued tag, in definition order."""
    return _ALL_TAGS


def tags_of_shape(*shapes: ValueShape) -> tuple[Tag, ...]:
    wanted = set(shapes)
    return tuple(t for t in _ALL_TAGS if t.shape in wanted)
