"""
Module: output

Purpose:
    Delivery of finished slices: ZIP archive and individual files.

Key Functions:
    - pack(): Named blobs to ZIP bytes
    - write_archive(): Timestamped archive on disk
    - save_slice(): Single slice download
    - slice_previews(): Scoped preview files

Dependencies:
    - zipfile (std)
"""

from .zip_writer import archive_filename, pack, pack_slices, write_archive
from .downloads import save_slice, save_slices, slice_previews

__all__ = [
    "archive_filename",
    "pack",
    "pack_slices",
    "write_archive",
    "save_slice",
    "save_slices",
    "slice_previews",
]
