"""
Module: images.raster

Purpose:
    Raster surface abstraction over a Pillow image. All rasters are RGBA
    so that transparent padding survives PNG encoding.

Key Classes:
    - Raster: Pixel buffer with crop and blit

Dependencies:
    - PIL/Pillow

Used By:
    - images.loader, images.resizer
    - slicing.extractor: Region copies and m_4 padding
    - slicing.encoder
"""

from __future__ import annotations

from typing import Optional, Tuple

from PIL import Image

Box = Tuple[int, int, int, int]

RASTER_MODE = "RGBA"
TRANSPARENT = (0, 0, 0, 0)

# Single-channel modes wider than 8 bits (16-bit PNG greyscale, float TIFF)
WIDE_MODES = frozenset({"I", "I;16", "I;16B", "I;16L", "I;16N", "F"})


def _to_8bit(image: Image.Image) -> Image.Image:
    """Scale 16-bit samples down to greyscale 8-bit; convert() alone clips at 255."""
    return image.convert("I").point(lambda v: v * (1 / 256)).convert("L")


class Raster:
    """
    2D RGBA pixel buffer.

    A raster is written only while it is being built (``blit`` into a
    freshly created ``Raster.blank``). Rasters handed out by the
    extractor are not modified afterwards.

    Example:
        >>> dest = Raster.blank(640, 480)
        >>> dest.blit(source, (0, 800, 640, 900), (0, 0, 640, 100))
        >>> dest.size
        (640, 480)
    """

    __slots__ = ("_image",)

    def __init__(self, image: Image.Image):
        if image.mode in WIDE_MODES:
            image = _to_8bit(image)
        if image.mode != RASTER_MODE:
            image = image.convert(RASTER_MODE)
        self._image = image

    @classmethod
    def blank(cls, width: int, height: int) -> Raster:
        """Create a fully transparent raster."""
        if width < 0 or height < 0:
            raise ValueError(f"Raster size must be non-negative: {width}x{height}")
        return cls(Image.new(RASTER_MODE, (width, height), TRANSPARENT))

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        """Underlying Pillow image. Treat as read-only."""
        return self._image

    # ─────────────────────────────────────────────────────────────────────────
    # Pixel Operations
    # ─────────────────────────────────────────────────────────────────────────

    def crop(self, box: Box) -> Raster:
        """
        Copy a rectangle into a new raster of the same size as the box.

        Raises:
            ValueError: If box lies outside this raster
        """
        self._check_box(box, "crop")
        return Raster(self._image.crop(box))

    def blit(
        self,
        source: Raster,
        src_box: Box,
        dest_box: Optional[Box] = None,
    ) -> None:
        """
        Draw a region of ``source`` into a region of this raster.

        The source rectangle is scaled to the destination rectangle when
        their sizes differ. Destination pixels are replaced, alpha included.

        Args:
            source: Raster to read from
            src_box: (left, top, right, bottom) in source
            dest_box: (left, top, right, bottom) in this raster.
                Defaults to src_box size placed at the origin.

        Raises:
            ValueError: If either box lies outside its raster
        """
        src_w = src_box[2] - src_box[0]
        src_h = src_box[3] - src_box[1]
        if dest_box is None:
            dest_box = (0, 0, src_w, src_h)
        dest_w = dest_box[2] - dest_box[0]
        dest_h = dest_box[3] - dest_box[1]

        if src_w <= 0 or src_h <= 0 or dest_w <= 0 or dest_h <= 0:
            return

        source._check_box(src_box, "blit source")
        self._check_box(dest_box, "blit destination")

        region = source.image.crop(src_box)
        if region.size != (dest_w, dest_h):
            region = region.resize((dest_w, dest_h), Image.Resampling.LANCZOS)
        self._image.paste(region, (dest_box[0], dest_box[1]))

    def copy(self) -> Raster:
        return Raster(self._image.copy())

    def _check_box(self, box: Box, what: str) -> None:
        left, top, right, bottom = box
        if left < 0 or top < 0:
            raise ValueError(f"{what} box {box} has negative origin")
        if right > self.width or bottom > self.height:
            raise ValueError(
                f"{what} box {box} exceeds raster size {self.width}x{self.height}"
            )
        if right < left or bottom < top:
            raise ValueError(f"{what} box {box} is inverted")

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height})"
