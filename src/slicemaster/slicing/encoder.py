"""
Module: slicing.encoder

Purpose:
    Serialize a raster to PNG bytes, alpha included.

Key Functions:
    - encode(): Raster -> PNG bytes

Dependencies:
    - PIL/Pillow

Used By:
    - slicing.encode_queue
"""

from __future__ import annotations

from io import BytesIO

from slicemaster.errors import EncodingFailure
from slicemaster.images.raster import Raster

PNG_FORMAT = "PNG"


def encode(raster: Raster, *, compress_level: int = 6) -> bytes:
    """
    Encode a raster as PNG.

    Args:
        raster: Raster to encode (RGBA)
        compress_level: zlib level, 0 (none) to 9 (smallest)

    Returns:
        PNG file contents

    Raises:
        EncodingFailure: If Pillow cannot write the image or writes nothing
    """
    if raster.width <= 0 or raster.height <= 0:
        raise EncodingFailure(
            f"Cannot encode empty raster {raster.width}x{raster.height}"
        )

    buffer = BytesIO()
    try:
        raster.image.save(buffer, format=PNG_FORMAT, compress_level=compress_level)
    except Exception as exc:
        raise EncodingFailure(f"PNG encoding failed: {exc}") from exc

    data = buffer.getvalue()
    if not data:
        raise EncodingFailure("PNG encoder produced no data")
    return data
