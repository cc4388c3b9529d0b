"""
Core Models Package

Immutable, validated data models. All models are frozen dataclasses so
they can be handed between encode threads without copying.
"""

from .regions import RegionDescriptor
from .slices import SliceResult

__all__ = [
    "RegionDescriptor",
    "SliceResult",
]
