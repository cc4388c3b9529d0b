import pytest
import sys
from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image

# Add src to sys.path so we can import slicemaster
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from slicemaster.images.raster import Raster  # noqa: E402


def make_row_coded_image(width: int, height: int) -> Image.Image:
    """
    Opaque RGBA image whose pixels encode their own position.

    R = y % 256, G = y // 256, B = x % 256, A = 255
    """
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = ys % 256
    pixels[..., 1] = ys // 256
    pixels[..., 2] = xs % 256
    pixels[..., 3] = 255
    return Image.fromarray(pixels)


# Common test fixtures
@pytest.fixture
def row_coded_raster():
    """Factory for 640 px wide row-coded rasters of a given height."""
    def _make(height: int, width: int = 640) -> Raster:
        return Raster(make_row_coded_image(width, height))
    return _make


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple 1280x1280 test image on disk."""
    img = Image.new("RGB", (1280, 1280), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def png_bytes():
    """Factory for encoded PNG bytes of a solid image."""
    def _make(width: int, height: int, color="red") -> bytes:
        buffer = BytesIO()
        Image.new("RGB", (width, height), color=color).save(buffer, format="PNG")
        return buffer.getvalue()
    return _make
