"""
Module: slicing.encode_queue

Purpose:
    Thread pool that encodes every extracted region concurrently and
    joins them before the run returns. A single failed encode fails the
    whole run; a partial slice set is never returned.

Key Classes:
    - EncodeQueue: Thread pool-based encode queue

Key Functions:
    - encode_regions(): Extracted regions -> SliceResults in name order

Dependencies:
    - concurrent.futures: Thread pool execution
    - slicing.encoder: PNG encoding

Used By:
    - pipeline: Encoding step
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple

from slicemaster.core.models import RegionDescriptor, SliceResult
from slicemaster.errors import EncodingFailure
from slicemaster.images.raster import Raster
from slicemaster.timing import TimingLog, timed_phase

from .encoder import encode

logger = logging.getLogger(__name__)


class EncodeQueue:
    """
    Thread pool-based encode queue.

    Queues one PNG encode per region. ``wait_all`` returns results in
    submission order regardless of which encode finished first.

    Usage:
        with EncodeQueue(max_workers=4) as queue:
            for region, raster in extracted:
                queue.submit(region, raster)
            slices = queue.wait_all()

    Attributes:
        max_workers: Maximum concurrent encode threads. 0 encodes inline.
    """

    def __init__(
        self,
        max_workers: int = 4,
        *,
        compress_level: int = 6,
        timing: Optional[TimingLog] = None,
    ):
        self.max_workers = max_workers
        self._compress_level = compress_level
        self._timing = timing
        self._executor: Optional[ThreadPoolExecutor] = (
            ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="encode")
            if max_workers > 0
            else None
        )
        self._pending: List[Tuple[RegionDescriptor, Future]] = []

    def submit(self, region: RegionDescriptor, raster: Raster) -> Future:
        """
        Queue an encode for one region.

        Returns:
            Future resolving to the region's SliceResult
        """
        if raster.size != region.size:
            raise ValueError(
                f"Raster {raster.size} does not match region {region}"
            )
        if self._executor is None:
            future: Future = Future()
            try:
                future.set_result(self._encode_one(region, raster))
            except EncodingFailure as exc:
                future.set_exception(exc)
        else:
            future = self._executor.submit(self._encode_one, region, raster)
        self._pending.append((region, future))
        return future

    def wait_all(self) -> List[SliceResult]:
        """
        Wait for all queued encodes.

        Every future is awaited even after a failure so no encode is left
        running; the first failure is then raised.

        Returns:
            SliceResults in submission order

        Raises:
            EncodingFailure: If any region failed to encode
        """
        results: List[SliceResult] = []
        failure: Optional[EncodingFailure] = None
        pending, self._pending = self._pending, []

        for region, future in pending:
            try:
                results.append(future.result())
            except EncodingFailure as exc:
                logger.error(f"Encoding {region.name} failed: {exc}")
                if failure is None:
                    failure = exc

        if failure is not None:
            raise failure
        return results

    def shutdown(self) -> None:
        """Shutdown the thread pool, waiting for running encodes."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "EncodeQueue":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()

    def _encode_one(self, region: RegionDescriptor, raster: Raster) -> SliceResult:
        with timed_phase(self._timing, "encode", region=region.name):
            try:
                data = encode(raster, compress_level=self._compress_level)
            except EncodingFailure as exc:
                raise EncodingFailure(
                    f"Could not encode {region.filename}: {exc}", region=region.name
                ) from exc
        logger.debug(f"Encoded {region.filename} ({len(data)} bytes)")
        return SliceResult.from_region(region, data)


def encode_regions(
    extracted: Iterable[Tuple[RegionDescriptor, Raster]],
    *,
    max_workers: int = 4,
    compress_level: int = 6,
    timing: Optional[TimingLog] = None,
) -> List[SliceResult]:
    """
    Encode extracted regions into SliceResults.

    Args:
        extracted: (descriptor, raster) pairs, e.g. from extract_regions()
        max_workers: Encode threads (0 = inline)
        compress_level: PNG zlib level
        timing: Optional TimingLog for per-region encode times

    Returns:
        SliceResults sorted by filename

    Raises:
        EncodingFailure: If any region failed; no partial list is returned
    """
    with EncodeQueue(max_workers, compress_level=compress_level, timing=timing) as queue:
        for region, raster in extracted:
            queue.submit(region, raster)
        results = queue.wait_all()
    return sorted(results, key=lambda s: s.name)
