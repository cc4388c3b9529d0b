"""
Module: output.zip_writer

Purpose:
    Bundle encoded slices into a single flat ZIP archive, either in
    memory or as a timestamped file on disk.

Key Functions:
    - pack(): (name, bytes) entries -> ZIP bytes
    - pack_slices(): SliceResults -> ZIP bytes
    - archive_filename(): "slices-<epoch ms>.zip"
    - write_archive(): Write the archive next to other downloads

Dependencies:
    - zipfile (std)

Used By:
    - pipeline.SliceRun.to_archive()
    - Callers offering the combined download
"""

from __future__ import annotations

import logging
import tempfile
import time
import zipfile
from io import BytesIO
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from slicemaster.core.models import SliceResult
from slicemaster.errors import PackagingFailure

logger = logging.getLogger(__name__)

ARCHIVE_PREFIX = "slices"


def pack(entries: Iterable[Tuple[str, bytes]]) -> bytes:
    """
    Pack named blobs into a ZIP archive.

    Creates a flat archive, one member per entry, no directories:
        slices.zip
        ├── m_1.png
        ├── m_2.png
        └── ...

    Args:
        entries: (name, data) pairs. Names must be unique.

    Returns:
        ZIP file contents

    Raises:
        PackagingFailure: On invalid/duplicate names or if zipfile fails
    """
    buffer = BytesIO()
    seen = set()
    try:
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            for name, data in entries:
                _check_entry_name(name, seen)
                seen.add(name)
                zf.writestr(name, data)
    except PackagingFailure:
        raise
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError, TypeError) as exc:
        raise PackagingFailure(f"Could not create archive: {exc}") from exc

    logger.debug(f"Packed {len(seen)} entries into archive")
    return buffer.getvalue()


def pack_slices(slices: Sequence[SliceResult]) -> bytes:
    """Pack slices under their download names."""
    if not slices:
        raise PackagingFailure("No slices to archive")
    return pack((s.name, s.encoded_bytes) for s in slices)


def archive_filename(timestamp: Optional[float] = None) -> str:
    """
    Archive download name based on epoch milliseconds.

    Example:
        >>> archive_filename(1700000000.123)
        'slices-1700000000123.zip'
    """
    if timestamp is None:
        timestamp = time.time()
    return f"{ARCHIVE_PREFIX}-{int(round(timestamp * 1000))}.zip"


def write_archive(
    slices: Sequence[SliceResult],
    output_dir: Path,
    *,
    timestamp: Optional[float] = None,
) -> Path:
    """
    Write the slice archive to ``output_dir``.

    The file is written to a temp file and moved into place so a failed
    write never leaves a truncated archive behind.

    Args:
        slices: Slices from a completed run
        output_dir: Destination directory (created if missing)
        timestamp: Epoch seconds for the filename (default: now)

    Returns:
        Path to the created archive

    Raises:
        PackagingFailure: If packing or writing fails
    """
    data = pack_slices(slices)
    output_path = Path(output_dir) / archive_filename(timestamp)

    logger.info(f"Creating ZIP export at {output_path}")
    try:
        atomic_write_bytes(data, output_path)
    except OSError as exc:
        raise PackagingFailure(f"Could not write archive {output_path}: {exc}") from exc
    return output_path


def _check_entry_name(name: str, seen: set) -> None:
    """Reject names that would not unpack to a flat list of files."""
    if not name or not name.strip():
        raise PackagingFailure("Archive entry name is empty")
    if "/" in name or "\\" in name:
        raise PackagingFailure(f"Archive entry name contains a path separator: {name!r}")
    if name in seen:
        raise PackagingFailure(f"Duplicate archive entry: {name!r}")


def atomic_write_bytes(data: bytes, path: Path) -> None:
    """Write bytes atomically using temp file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        suffix=path.suffix,
        dir=path.parent,
        delete=False,
    ) as f:
        temp_path = Path(f.name)
        try:
            f.write(data)
        except BaseException:
            f.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        # replace() overwrites existing files on all platforms
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
