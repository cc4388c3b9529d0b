"""
Module: slicing.extractor

Purpose:
    Cut the normalized raster into its named regions. Top and middle
    regions are direct copies; m_4 is a fixed 640x480 raster that gets
    whatever source rows remain below the middle band and stays
    transparent underneath.

Key Functions:
    - extract_regions(): Normalized raster -> [(RegionDescriptor, Raster)]
    - extract_layout(): Same, for a precomputed RegionLayout

Dependencies:
    - images.raster: Raster crop/blit
    - slicing.layout: Region geometry

Used By:
    - pipeline: Extraction step
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from slicemaster.config import DEFAULT_SPLIT_Y2, TARGET_WIDTH
from slicemaster.core.models import RegionDescriptor
from slicemaster.errors import InvalidInputError
from slicemaster.images.raster import Raster

from .layout import MIDDLE_REGION, RegionLayout, plan_regions

logger = logging.getLogger(__name__)

ExtractedRegion = Tuple[RegionDescriptor, Raster]


def extract_regions(
    normalized: Raster,
    split_y2: int = DEFAULT_SPLIT_Y2,
) -> List[ExtractedRegion]:
    """
    Extract all regions from a normalized raster.

    Args:
        normalized: Raster produced by ``resize`` (width must be 640)
        split_y2: Lower edge of m_3. Below 640 simply omits m_3.

    Returns:
        (descriptor, raster) pairs sorted by "<name>.png". Always contains
        m_4; contains the four top band regions unless the raster has
        no rows; contains m_3 only when it has rows.

    Raises:
        InvalidInputError: If normalized width is not 640
        ValueError: If split_y2 is negative

    Example:
        >>> [r.name for r, _ in extract_regions(Raster.blank(640, 900))]
        ['m_1', 'm_2', 'm_3', 'm_4', 'm_5', 'm_6']
    """
    if normalized.width != TARGET_WIDTH:
        raise InvalidInputError(
            f"Normalized raster must be {TARGET_WIDTH} px wide, got {normalized.width}"
        )
    layout = plan_regions(normalized.height, split_y2)
    return extract_layout(normalized, layout)


def extract_layout(normalized: Raster, layout: RegionLayout) -> List[ExtractedRegion]:
    """Realize a RegionLayout against pixels."""
    if layout.source_height != normalized.height:
        raise ValueError(
            f"Layout planned for height {layout.source_height}, "
            f"raster is {normalized.height}"
        )

    extracted: List[ExtractedRegion] = []
    for region in layout.copied:
        extracted.append((region, normalized.crop(region.box)))
        logger.debug(f"Extracted {region}")

    if not any(r.name == MIDDLE_REGION for r in layout.copied):
        logger.debug(
            f"m_3 omitted: split_y2={layout.split_y2}, height={layout.source_height}"
        )

    extracted.append((layout.bottom, _extract_bottom(normalized, layout)))

    extracted.sort(key=lambda pair: pair[0].filename)
    return extracted


def _extract_bottom(normalized: Raster, layout: RegionLayout) -> Raster:
    """Build m_4: fixed size, source rows on top, transparent padding below."""
    bottom = layout.bottom
    canvas = Raster.blank(bottom.width, bottom.height)

    if layout.bottom_fill > 0:
        fill = layout.bottom_fill
        canvas.blit(
            normalized,
            (0, bottom.y, bottom.width, bottom.y + fill),
            (0, 0, bottom.width, fill),
        )

    if layout.bottom_padding > 0:
        logger.info(
            f"m_4 padded with {layout.bottom_padding} transparent rows "
            f"({layout.bottom_fill} rows of source available)"
        )
    return canvas
