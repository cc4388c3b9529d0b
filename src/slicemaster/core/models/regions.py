"""
Module: regions

Purpose:
    Provides the RegionDescriptor dataclass - a named rectangle in the
    coordinate space of the normalized (640 px wide) raster.

Key Functions:
    - RegionDescriptor.box: (left, top, right, bottom) tuple for PIL
    - RegionDescriptor.is_empty: Zero-area check
    - RegionDescriptor.to_dict(): Serialize for JSON
    - RegionDescriptor.from_dict(data): Deserialize from JSON

Dependencies:
    - dataclasses (std)

Used By:
    - slicing.layout: Region geometry
    - slicing.extractor: Pixel extraction
    - core.models.slices.SliceResult
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RegionDescriptor:
    """
    Named region of the normalized raster, in pixels.

    The region covers [x, x + width) x [y, y + height).

    Attributes:
        name: Region name like "m_1" (file is "<name>.png")
        x: X-coordinate of left edge
        y: Y-coordinate of top edge. For m_4 this follows split_y2 and
           may lie below the end of the source.
        width: Width in pixels
        height: Height in pixels

    Invariants:
        - name is non-empty
        - x >= 0
        - width >= 0 and height >= 0

    Example:
        >>> region = RegionDescriptor("m_1", 80, 0, 240, 640)
        >>> region.box
        (80, 0, 320, 640)
        >>> region.filename
        'm_1.png'
    """

    name: str
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate region on construction."""
        if not self.name:
            raise ValueError("name must be non-empty")
        if self.x < 0:
            raise ValueError(f"x must be >= 0: {self.x}")
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def filename(self) -> str:
        """Output filename, also used as the sort key."""
        return f"{self.name}.png"

    @property
    def right(self) -> int:
        """X-coordinate of right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Y-coordinate of bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) tuple suitable for PIL crop."""
        return (self.x, self.y, self.right, self.bottom)

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) tuple."""
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        """True if the region has no pixels."""
        return self.width <= 0 or self.height <= 0

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict) -> RegionDescriptor:
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"RegionDescriptor({self.name!r}, {self.x}, {self.y}, {self.width}x{self.height})"
