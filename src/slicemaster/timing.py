"""
Module: timing

Purpose:
    Timing instrumentation for slicing runs. Records how long each
    pipeline phase (load, resize, extract, encode) and each region
    encode took.

Key Classes:
    - TimingLog: Collects run-level and region-level timings

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - pipeline: Run orchestration
    - slicing.encode_queue: Per-region encode timings
"""

from __future__ import annotations

import json
import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Timing metrics for a slicing run.

    Attributes:
        run_timings: Dict of phase_name -> duration_seconds
        region_timings: Dict of region name -> {phase_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log_run("resize", 0.018)
        >>> log.log_region("m_4", "encode", 0.004)
        >>> print(log.summary())
    """
    run_timings: Dict[str, float] = field(default_factory=dict)
    region_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def log_run(self, phase: str, duration: float) -> None:
        """Log a run-level timing metric."""
        with self._lock:
            self.run_timings[phase] = duration

    def log_region(self, region: str, phase: str, duration: float) -> None:
        """Log a region-level timing metric (thread safe, called from encoders)."""
        with self._lock:
            self.region_timings.setdefault(region, {})[phase] = duration

    @property
    def total(self) -> float:
        """Sum of run-level phases."""
        return sum(self.run_timings.values())

    def get_slowest_regions(self, n: int = 3) -> List[tuple]:
        """Get the N slowest regions with their total time."""
        results = [
            (name, sum(phases.values()))
            for name, phases in self.region_timings.items()
        ]
        results.sort(key=lambda x: x[1], reverse=True)
        return results[:n]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Slicing Timing Summary ==="]

        if self.run_timings:
            lines.append("Run phases:")
            for phase, duration in self.run_timings.items():
                lines.append(f"  {phase:15s} {duration:.3f}s")

        slowest = self.get_slowest_regions(3)
        if slowest:
            lines.append("")
            lines.append("Slowest regions:")
            for name, total in slowest:
                lines.append(f"  {name}: {total:.3f}s")

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        return {
            "run_timings": dict(self.run_timings),
            "region_timings": {k: dict(v) for k, v in self.region_timings.items()},
            "total": self.total,
        }

    def save(self, path: Path) -> None:
        """Save timing data to a JSON file, overwriting it."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug(f"Saved timing data to {path}")


@contextmanager
def timed_phase(
    log: Optional[TimingLog],
    phase: str,
    region: Optional[str] = None,
) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    Args:
        log: TimingLog to record into. None disables timing.
        phase: Name of the phase being timed
        region: If provided, records as region-level metric;
                otherwise records as run-level metric

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "resize"):
        ...     normalized = resize(source)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        if log is not None:
            elapsed = time.perf_counter() - start
            if region:
                log.log_region(region, phase, elapsed)
            else:
                log.log_run(phase, elapsed)
