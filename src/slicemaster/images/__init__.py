"""
Module: images

Purpose:
    Raster abstraction plus the loading and resizing steps that turn an
    uploaded file into the normalized 640 px wide raster.

Key Classes:
    - Raster: RGBA pixel buffer with crop and blit

Key Functions:
    - load_raster(): Decode a source image
    - resize(): Normalize to the target width

Dependencies:
    - PIL: Image manipulation
"""

from .raster import Raster
from .loader import load_raster
from .resizer import resize, scaled_height

__all__ = [
    "Raster",
    "load_raster",
    "resize",
    "scaled_height",
]
