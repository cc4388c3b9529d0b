"""
Module: pipeline

Purpose:
    Main pipeline for slicing one uploaded image. Coordinates loading,
    normalization, region extraction and PNG encoding, and returns the
    complete slice set or raises; a partial set is never returned.

Key Functions:
    - process_image(): Main entry point (source image -> SliceRun)
    - slice_raster(): Normalized raster -> SliceResults

Key Classes:
    - SliceRun: Container for a run's output

Dependencies:
    - images: Loading and resizing
    - slicing: Geometry, extraction and encoding
    - output.zip_writer: Archive of the run

Used By:
    - Front ends (upload form, gallery, download buttons)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .config import SliceConfig
from .core.models import SliceResult
from .images import Raster, load_raster, resize
from .images.loader import ImageSource
from .output.zip_writer import pack_slices, write_archive
from .slicing import encode_regions, extract_regions
from .timing import TimingLog, timed_phase

logger = logging.getLogger(__name__)


@dataclass
class SliceRun:
    """
    Result of slicing one image.

    Replaced wholesale by the next run; nothing carries over.

    Attributes:
        slices: SliceResults sorted by name
        source_size: (width, height) of the decoded source
        normalized_size: (width, height) after resizing
        split_y2: Lower edge of the middle band used for this run
        timings: Phase timings
    """
    slices: Tuple[SliceResult, ...]
    source_size: Tuple[int, int]
    normalized_size: Tuple[int, int]
    split_y2: int
    timings: TimingLog = field(default_factory=TimingLog)

    @property
    def filenames(self) -> List[str]:
        return [s.name for s in self.slices]

    def get(self, name: str) -> SliceResult:
        """Look up a slice by id ("m_1") or download name ("m_1.png")."""
        for s in self.slices:
            if name in (s.id, s.name):
                return s
        raise KeyError(f"No slice named {name!r}")

    def to_archive(self) -> bytes:
        """ZIP bytes of every slice. Raises PackagingFailure."""
        return pack_slices(self.slices)

    def write_archive(self, output_dir: Path, *, timestamp: Optional[float] = None) -> Path:
        """Write "slices-<epoch ms>.zip" to output_dir. Raises PackagingFailure."""
        return write_archive(self.slices, output_dir, timestamp=timestamp)

    def __iter__(self) -> Iterator[SliceResult]:
        return iter(self.slices)

    def __len__(self) -> int:
        return len(self.slices)


def slice_raster(
    normalized: Raster,
    *,
    config: Optional[SliceConfig] = None,
    timing: Optional[TimingLog] = None,
) -> List[SliceResult]:
    """
    Extract and encode every region of a normalized raster.

    Args:
        normalized: 640 px wide raster from resize()
        config: Run configuration (default SliceConfig())
        timing: Optional TimingLog

    Returns:
        SliceResults sorted by name

    Raises:
        InvalidInputError: If the raster is not 640 px wide
        EncodingFailure: If any region fails to encode
    """
    config = config or SliceConfig()

    with timed_phase(timing, "extract"):
        extracted = extract_regions(normalized, config.split_y2)

    with timed_phase(timing, "encode"):
        return encode_regions(
            extracted,
            max_workers=config.encode_workers,
            compress_level=config.png_compress_level,
            timing=timing,
        )


def process_image(
    source: ImageSource,
    split_y2: Optional[int] = None,
    *,
    config: Optional[SliceConfig] = None,
) -> SliceRun:
    """
    Slice an uploaded image.

    Pipeline:
    1. Decode the source (EXIF orientation applied)
    2. Resize to 640 px wide, height rounded half up
    3. Extract the top band, m_3 and the fixed-size m_4
    4. Encode all regions to PNG concurrently and wait for all of them

    Args:
        source: Path, bytes, binary file, PIL image or Raster
        split_y2: Overrides config.split_y2 when given
        config: Run configuration (default SliceConfig())

    Returns:
        SliceRun with the complete, name-sorted slice set

    Raises:
        InvalidInputError: Source missing, undecodable or zero-sized
        EncodingFailure: A region could not be encoded
        TypeError: split_y2 is not an int
        ValueError: split_y2 is negative

    Example:
        >>> run = process_image(Path("product.jpg"))
        >>> run.filenames
        ['m_1.png', 'm_2.png', 'm_3.png', 'm_4.png', 'm_5.png', 'm_6.png']
    """
    config = config or SliceConfig()
    if split_y2 is not None:
        config = replace(config, split_y2=split_y2)

    timing = TimingLog()

    with timed_phase(timing, "load"):
        raster = load_raster(source)

    with timed_phase(timing, "resize"):
        normalized = resize(raster)

    logger.info(
        f"Slicing {raster.width}x{raster.height} image "
        f"(normalized {normalized.width}x{normalized.height}, split_y2={config.split_y2})"
    )

    slices = slice_raster(normalized, config=config, timing=timing)

    logger.info(f"Produced {len(slices)} slices: {', '.join(s.name for s in slices)}")
    logger.debug(timing.summary())

    return SliceRun(
        slices=tuple(slices),
        source_size=raster.size,
        normalized_size=normalized.size,
        split_y2=config.split_y2,
        timings=timing,
    )
