"""
Module: slices

Purpose:
    Provides SliceResult - the externally visible artifact of a run:
    one encoded PNG plus the geometry it was cut from.

Key Functions:
    - SliceResult.from_region(): Build from a descriptor and PNG bytes
    - SliceResult.descriptor: Region the slice was cut from
    - SliceResult.to_dict(): Metadata without the image bytes

Dependencies:
    - dataclasses (std)
    - core.models.regions: RegionDescriptor

Used By:
    - slicing.encode_queue
    - output.zip_writer, output.downloads
    - pipeline.SliceRun
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .regions import RegionDescriptor


@dataclass(frozen=True, slots=True)
class SliceResult:
    """
    Encoded slice with its origin in the normalized raster.

    Attributes:
        id: Region name like "m_3"
        name: Download name like "m_3.png"
        encoded_bytes: PNG data
        width: Slice width in pixels
        height: Slice height in pixels
        x: Origin x in the normalized raster
        y: Origin y in the normalized raster

    Invariants:
        - width > 0 and height > 0
        - name == f"{id}.png"
    """

    id: str
    name: str
    encoded_bytes: bytes = field(repr=False)
    width: int
    height: int
    x: int
    y: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"slice {self.id} must have positive size: {self.width}x{self.height}"
            )
        if self.name != f"{self.id}.png":
            raise ValueError(f"name {self.name!r} does not match id {self.id!r}")

    @classmethod
    def from_region(cls, region: RegionDescriptor, encoded_bytes: bytes) -> SliceResult:
        return cls(
            id=region.name,
            name=region.filename,
            encoded_bytes=encoded_bytes,
            width=region.width,
            height=region.height,
            x=region.x,
            y=region.y,
        )

    @property
    def descriptor(self) -> RegionDescriptor:
        return RegionDescriptor(self.id, self.x, self.y, self.width, self.height)

    @property
    def size_bytes(self) -> int:
        return len(self.encoded_bytes)

    def to_dict(self) -> dict:
        """Serialize metadata (bytes omitted)."""
        return {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "x": self.x,
            "y": self.y,
            "size_bytes": self.size_bytes,
        }
