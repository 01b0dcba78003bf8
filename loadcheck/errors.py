"""
loadcheck.errors
AUTHOR: carter-vin

Fatal check errors

Every error here ends the run with UNKNOWN and a one-line explanation.
No partial reports, no retries.
"""

from __future__ import annotations

from loadcheck.status import Status


class CheckError(Exception):
    """
    Base for conditions that stop the check before a report exists
    """

    status: Status = Status.UNKNOWN


class InvalidThreshold(CheckError):
    """Malformed or missing threshold triplet"""


class ThresholdOrderViolation(CheckError):
    """Warning threshold above critical threshold for some period"""


class UnavailableError(CheckError):
    """Load source or process listing could not produce data"""


class ArgumentError(CheckError):
    """Command line unusable (no arguments, stray positionals)"""
