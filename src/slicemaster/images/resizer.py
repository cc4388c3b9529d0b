"""
Module: images.resizer

Purpose:
    Normalize a source raster to the fixed 640 px width, scaling height
    proportionally. Everything downstream works in this coordinate space.

Key Functions:
    - scaled_height(): Integer target height (round half up)
    - resize(): Produce the normalized raster

Dependencies:
    - PIL/Pillow (via Raster.blit, LANCZOS resampling)

Used By:
    - pipeline: Step after loading
"""

from __future__ import annotations

import logging

from slicemaster.config import TARGET_WIDTH
from slicemaster.errors import InvalidInputError

from .raster import Raster

logger = logging.getLogger(__name__)


def scaled_height(width: int, height: int, target_width: int = TARGET_WIDTH) -> int:
    """
    Height after scaling ``width`` to ``target_width``, rounded half up.

    Computed in integer arithmetic so the result never depends on float
    representation.

    Example:
        >>> scaled_height(1280, 1280)
        640
        >>> scaled_height(3, 1)   # 213.33 -> 213
        213
        >>> scaled_height(1280, 1)  # 0.5 -> 1
        1
    """
    if width <= 0:
        raise InvalidInputError(f"Source width must be positive: {width}")
    return (2 * height * target_width + width) // (2 * width)


def resize(source: Raster, target_width: int = TARGET_WIDTH) -> Raster:
    """
    Scale ``source`` to ``target_width`` keeping its aspect ratio.

    No cropping: the full source is drawn into the new raster.

    Args:
        source: Decoded source raster
        target_width: Output width (640 for the slicing pipeline)

    Returns:
        New raster of size target_width x scaled_height(...)

    Raises:
        InvalidInputError: If source or target has a non-positive dimension
    """
    if source.width <= 0 or source.height <= 0:
        raise InvalidInputError(
            f"Cannot resize image with dimensions {source.width}x{source.height}"
        )
    if target_width <= 0:
        raise InvalidInputError(f"Target width must be positive: {target_width}")

    target_height = scaled_height(source.width, source.height, target_width)
    logger.debug(
        f"Resizing {source.width}x{source.height} -> {target_width}x{target_height}"
    )

    if (target_width, target_height) == source.size:
        return source.copy()

    normalized = Raster.blank(target_width, target_height)
    # Extremely wide sources round to zero rows; blit is a no-op then
    normalized.blit(
        source,
        (0, 0, source.width, source.height),
        (0, 0, target_width, target_height),
    )
    return normalized
