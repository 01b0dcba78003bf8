"""
loadcheck.evaluate
AUTHOR: carter-vin

Status evaluation for one load sample

Periods are checked in order (1, 5, 15 minutes):
- a critical breach ends the scan with CRITICAL
- a warning breach sets WARNING and keeps scanning
- an in-bounds period never lowers a status already set
"""

from __future__ import annotations

from typing import Sequence

from loadcheck.status import Status


def evaluate_load(
    values: Sequence[float],
    warning: Sequence[float],
    critical: Sequence[float],
) -> Status:
    """
    Derive OK/WARNING/CRITICAL from raw or scaled values
    """
    status = Status.OK
    for i in range(3):
        if values[i] > critical[i]:
            status = Status.CRITICAL
            break
        if values[i] > warning[i]:
            status = Status.WARNING
    return status
