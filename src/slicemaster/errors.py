"""
Module: errors

Purpose:
    Exception types surfaced to callers of the slicing pipeline.
    Every failure aborts the run it belongs to; nothing is retried.

Key Classes:
    - SlicerError: Base class
    - InvalidInputError: Source image unusable, raised before extraction
    - EncodingFailure: A region could not be serialized to PNG
    - PackagingFailure: ZIP archive could not be built
"""

from __future__ import annotations

from typing import Optional


class SlicerError(Exception):
    """Base class for all slicing errors."""
    pass


class InvalidInputError(SlicerError):
    """Source image is missing, undecodable or has zero dimensions."""
    pass


class EncodingFailure(SlicerError):
    """
    A region failed to encode.

    Attributes:
        region: Name of the region that failed (e.g. "m_4"), if known.
    """

    def __init__(self, message: str, region: Optional[str] = None):
        super().__init__(message)
        self.region = region


class PackagingFailure(SlicerError):
    """Archive creation failed. Individual slices remain usable."""
    pass
