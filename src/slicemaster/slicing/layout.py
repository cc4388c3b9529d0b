"""
Module: slicing.layout

Purpose:
    Pure geometry for the six fixed regions. Maps the normalized height
    and split_y2 to region descriptors without touching pixels, so the
    boundary arithmetic can be tested on its own.

    Normalized raster (640 wide):

        y=0    +----+---------+---------+----+
               |m_5 |   m_1   |   m_2   |m_6 |   top band, min(640, H) tall
        y=640  +----+---------+---------+----+
               |             m_3             |   640 .. min(split_y2, H)
        split  +-----------------------------+
               |             m_4             |   always 640x480, padded
               +-----------------------------+

Key Functions:
    - plan_regions(): Compute a RegionLayout

Key Classes:
    - RegionLayout: Descriptors plus m_4 fill height

Dependencies:
    - slicemaster.config: Geometry constants
    - core.models.regions: RegionDescriptor

Used By:
    - slicing.extractor
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from slicemaster.config import BOTTOM_HEIGHT, BOTTOM_WIDTH, SPLIT_Y1, TARGET_WIDTH
from slicemaster.core.models import RegionDescriptor

BOTTOM_REGION = "m_4"
MIDDLE_REGION = "m_3"

# (name, x, width) of the top band, left to right: m_5 | m_1 | m_2 | m_6
SIDE_STRIP_WIDTH = 80
CENTER_HALF_WIDTH = (TARGET_WIDTH - 2 * SIDE_STRIP_WIDTH) // 2  # 240
TOP_COLUMNS: Tuple[Tuple[str, int, int], ...] = (
    ("m_5", 0, SIDE_STRIP_WIDTH),
    ("m_6", TARGET_WIDTH - SIDE_STRIP_WIDTH, SIDE_STRIP_WIDTH),
    ("m_1", SIDE_STRIP_WIDTH, CENTER_HALF_WIDTH),
    ("m_2", SIDE_STRIP_WIDTH + CENTER_HALF_WIDTH, CENTER_HALF_WIDTH),
)


@dataclass(frozen=True)
class RegionLayout:
    """
    Geometry for one normalized raster.

    Attributes:
        source_height: Height of the normalized raster
        split_y2: Requested lower edge of m_3
        copied: Regions copied directly from the source, name-sorted.
            Never contains empty regions.
        bottom: m_4 descriptor (always 640x480, y = bottom start)
        bottom_fill: Source rows copied into the top of m_4 (0..480).
            Rows below this are transparent padding.
    """
    source_height: int
    split_y2: int
    copied: Tuple[RegionDescriptor, ...]
    bottom: RegionDescriptor
    bottom_fill: int

    @property
    def regions(self) -> Tuple[RegionDescriptor, ...]:
        """All emitted regions sorted by filename."""
        return tuple(
            sorted(self.copied + (self.bottom,), key=lambda r: r.filename)
        )

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.regions)

    @property
    def bottom_padding(self) -> int:
        """Transparent rows at the foot of m_4."""
        return self.bottom.height - self.bottom_fill

    def get(self, name: str) -> RegionDescriptor:
        for region in self.regions:
            if region.name == name:
                return region
        raise KeyError(f"Region not in layout: {name}")


def plan_regions(source_height: int, split_y2: int) -> RegionLayout:
    """
    Compute region geometry for a normalized raster.

    Top band regions shrink with short sources and vanish only when the
    source has no rows. m_3 is omitted when it would have no rows. m_4
    keeps its fixed size and pads with transparent rows instead.

    Args:
        source_height: Height of the normalized raster (>= 0)
        split_y2: Lower edge of the middle band (>= 0)

    Returns:
        RegionLayout

    Raises:
        TypeError: If either argument is not an int
        ValueError: If either argument is negative

    Example:
        >>> layout = plan_regions(900, 800)
        >>> layout.get("m_3").height
        160
        >>> layout.bottom_fill
        100
    """
    for arg, value in (("source_height", source_height), ("split_y2", split_y2)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{arg} must be an integer, got {type(value).__name__}")
    if source_height < 0:
        raise ValueError(f"source_height must be non-negative: {source_height}")
    if split_y2 < 0:
        raise ValueError(f"split_y2 must be non-negative: {split_y2}")

    copied = []

    # Top band
    top_height = min(SPLIT_Y1, source_height)
    if top_height > 0:
        for name, x, width in TOP_COLUMNS:
            region = RegionDescriptor(name, x, 0, width, top_height)
            if not region.is_empty:
                copied.append(region)

    # Middle band
    mid_start = SPLIT_Y1
    mid_end = min(split_y2, source_height)
    mid_height = mid_end - mid_start
    if mid_height > 0:
        copied.append(
            RegionDescriptor(MIDDLE_REGION, 0, mid_start, TARGET_WIDTH, mid_height)
        )

    # Bottom band starts wherever the middle band stopped
    bot_start = mid_end
    available = source_height - bot_start
    bottom_fill = min(available, BOTTOM_HEIGHT) if available > 0 else 0
    bottom = RegionDescriptor(BOTTOM_REGION, 0, bot_start, BOTTOM_WIDTH, BOTTOM_HEIGHT)

    copied.sort(key=lambda r: r.filename)
    return RegionLayout(
        source_height=source_height,
        split_y2=split_y2,
        copied=tuple(copied),
        bottom=bottom,
        bottom_fill=bottom_fill,
    )
