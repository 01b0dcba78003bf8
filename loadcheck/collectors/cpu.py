"""
loadcheck.collectors.cpu
AUTHOR: carter-vin

Per-CPU load scaling
- stdlib only
- degrade gracefully: unknown CPU count means "don't scale", never an error
"""

from __future__ import annotations

import os
from typing import Optional

from loadcheck.collectors.loadavg import LoadSample


def logical_cpu_count() -> Optional[int]:
    """
    Number of logical CPUs, or None when the platform can't tell
    """
    return os.cpu_count()


def scale_sample(sample: LoadSample, cpu_count: int) -> LoadSample:
    """
    Divide each average by the logical CPU count
    """
    return LoadSample(
        load1=sample.load1 / cpu_count,
        load5=sample.load5 / cpu_count,
        load15=sample.load15 / cpu_count,
    )


def maybe_scale(sample: LoadSample, cpu_count: Optional[int]) -> Optional[LoadSample]:
    """
    Scaled sample when cpu_count is usable, else None (evaluate raw values)
    """
    if cpu_count is None or cpu_count <= 0:
        return None
    return scale_sample(sample, cpu_count)
