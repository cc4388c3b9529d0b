"""
Module: slicing

Purpose:
    Slicing subpackage: fixed region geometry, pixel extraction and PNG
    encoding of the resulting regions.

Key Modules:
    - layout: Pure region geometry (plan_regions)
    - extractor: Cut regions from the normalized raster
    - encoder: PNG serialization
    - encode_queue: Concurrent encoding joined before return

Dependencies:
    - PIL: Image manipulation
    - slicemaster.core.models: RegionDescriptor, SliceResult

Used By:
    - pipeline
"""

from .layout import RegionLayout, plan_regions
from .extractor import extract_regions
from .encoder import encode
from .encode_queue import EncodeQueue, encode_regions

__all__ = [
    "RegionLayout",
    "plan_regions",
    "extract_regions",
    "encode",
    "EncodeQueue",
    "encode_regions",
]
