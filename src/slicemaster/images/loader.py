"""
Module: images.loader

Purpose:
    Decode the uploaded source image into a Raster. EXIF orientation is
    applied so the raster matches what a browser would display.

Key Functions:
    - load_raster(): Path, bytes, file object or PIL image -> Raster

Dependencies:
    - PIL/Pillow

Used By:
    - pipeline: First step of a run
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from slicemaster.errors import InvalidInputError

from .raster import Raster

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, BinaryIO, Image.Image, Raster]


def load_raster(source: ImageSource) -> Raster:
    """
    Decode a source image into an RGBA raster.

    Args:
        source: File path, encoded bytes, binary file object, an already
            decoded PIL image, or a Raster (returned unchanged).

    Returns:
        Raster with width and height >= 1

    Raises:
        InvalidInputError: If the file is missing, cannot be decoded, or
            has a zero dimension.
    """
    if isinstance(source, Raster):
        _check_dimensions(source.width, source.height, "raster")
        return source

    if isinstance(source, Image.Image):
        _check_dimensions(source.width, source.height, "image")
        return Raster(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise InvalidInputError(f"Image file not found: {path}")
        label = str(path)
        try:
            stream: BinaryIO = open(path, "rb")
        except OSError as exc:
            raise InvalidInputError(f"Could not read image file {path}: {exc}") from exc
    elif isinstance(source, (bytes, bytearray)):
        label = "<bytes>"
        stream = BytesIO(source)
    elif hasattr(source, "read"):
        label = getattr(source, "name", "<stream>")
        stream = source
    else:
        raise InvalidInputError(
            f"Unsupported image source type: {type(source).__name__}"
        )

    try:
        with Image.open(stream) as opened:
            opened.load()
            image = ImageOps.exif_transpose(opened)
            raster = Raster(image)
    except UnidentifiedImageError as exc:
        raise InvalidInputError(f"Could not load image: {label} is not a recognised image") from exc
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise InvalidInputError(f"Could not load image {label}: {exc}") from exc
    finally:
        if isinstance(source, (str, Path)):
            stream.close()

    _check_dimensions(raster.width, raster.height, label)
    logger.debug(f"Loaded {label} as {raster.width}x{raster.height}")
    return raster


def _check_dimensions(width: int, height: int, label: str) -> None:
    if width <= 0 or height <= 0:
        raise InvalidInputError(
            f"Image {label} has invalid dimensions {width}x{height}"
        )
