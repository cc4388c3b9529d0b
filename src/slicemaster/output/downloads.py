"""
Module: output.downloads

Purpose:
    Per-slice downloads and scoped preview files. Preview files play the
    role of browser object URLs: they exist only inside a ``with`` block
    and are removed when the caller is done displaying them.

Key Functions:
    - save_slice(): Write one slice under its name
    - save_slices(): Write every slice of a run
    - slice_previews(): Context manager yielding {name: Path}

Dependencies:
    - tempfile (std)

Used By:
    - Callers offering single-slice download or a preview gallery
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, List, Sequence

from slicemaster.core.models import SliceResult

from .zip_writer import atomic_write_bytes

logger = logging.getLogger(__name__)


def save_slice(slice_result: SliceResult, output_dir: Path) -> Path:
    """
    Write a slice's PNG bytes to ``output_dir / slice_result.name``.

    Existing files of the same name are replaced.

    Returns:
        Path to the written file
    """
    path = Path(output_dir) / slice_result.name
    atomic_write_bytes(slice_result.encoded_bytes, path)
    logger.debug(f"Saved {slice_result.name} to {path}")
    return path


def save_slices(slices: Sequence[SliceResult], output_dir: Path) -> List[Path]:
    """Write every slice to ``output_dir``, in the given order."""
    paths = [save_slice(s, output_dir) for s in slices]
    logger.info(f"Saved {len(paths)} slices to {output_dir}")
    return paths


@contextmanager
def slice_previews(
    slices: Sequence[SliceResult],
) -> Generator[Dict[str, Path], None, None]:
    """
    Materialize slices as temporary files for previewing.

    Files are created on entry and the directory holding them is deleted
    on exit, including when the block raises.

    Example:
        >>> with slice_previews(run.slices) as previews:
        ...     show(previews["m_1.png"])
    """
    preview_dir = Path(tempfile.mkdtemp(prefix="slicemaster-preview-"))
    try:
        previews = {}
        for s in slices:
            path = preview_dir / s.name
            path.write_bytes(s.encoded_bytes)
            previews[s.name] = path
        yield previews
    finally:
        shutil.rmtree(preview_dir, ignore_errors=True)
        logger.debug(f"Released {len(slices)} previews in {preview_dir}")
