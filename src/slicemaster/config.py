"""
Module: config

Purpose:
    Fixed slicing geometry and the run configuration dataclass. Geometry
    constants are not configurable; only the lower edge of the middle
    band (split_y2) and encoding settings are.

Key Classes:
    - SliceConfig: Immutable run settings

Dependencies:
    - dataclasses (std)

Used By:
    - slicing.layout: Region geometry
    - slicing.encode_queue: Worker count and PNG compression
    - pipeline: Run orchestration
"""

from __future__ import annotations

from dataclasses import dataclass

# Normalized width every source is resized to
TARGET_WIDTH = 640

# Lower edge of the top band (m_1, m_2, m_5, m_6). Equal to the normalized
# width so the top band is square on tall sources.
SPLIT_Y1 = 640

DEFAULT_MIDDLE_HEIGHT = 160
DEFAULT_SPLIT_Y2 = SPLIT_Y1 + DEFAULT_MIDDLE_HEIGHT  # 800

# m_4 is always emitted at this size
BOTTOM_WIDTH = 640
BOTTOM_HEIGHT = 480


@dataclass(frozen=True)
class SliceConfig:
    """
    Configuration for a slicing run (immutable).

    Attributes:
        split_y2: Lower edge of the middle band (m_3) in normalized pixels.
            Values below SPLIT_Y1 are allowed and simply omit m_3.
        encode_workers: Threads used for PNG encoding. 0 encodes inline.
        png_compress_level: zlib level passed to Pillow (0-9).

    Example:
        >>> SliceConfig().split_y2
        800
        >>> SliceConfig.with_middle_height(200).split_y2
        840
    """
    split_y2: int = DEFAULT_SPLIT_Y2
    encode_workers: int = 4
    png_compress_level: int = 6

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(self.split_y2, int) or isinstance(self.split_y2, bool):
            raise TypeError(
                f"split_y2 must be an integer, got {type(self.split_y2).__name__}"
            )
        if self.split_y2 < 0:
            raise ValueError(f"split_y2 must be non-negative: {self.split_y2}")
        if self.encode_workers < 0:
            raise ValueError(
                f"encode_workers must be non-negative: {self.encode_workers}"
            )
        if not 0 <= self.png_compress_level <= 9:
            raise ValueError(
                f"png_compress_level must be between 0 and 9: {self.png_compress_level}"
            )

    @classmethod
    def with_middle_height(cls, middle_height: int, **kwargs) -> SliceConfig:
        """Build a config whose m_3 band is ``middle_height`` pixels tall."""
        return cls(split_y2=SPLIT_Y1 + middle_height, **kwargs)

    @property
    def split_y1(self) -> int:
        """Fixed upper edge of the middle band."""
        return SPLIT_Y1

    @property
    def middle_height(self) -> int:
        """Requested height of m_3 (may be negative when split_y2 < split_y1)."""
        return self.split_y2 - SPLIT_Y1
