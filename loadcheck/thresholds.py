"""
loadcheck.thresholds
AUTHOR: carter-vin

Threshold triplets for the 1/5/15-minute load averages

Input format: "T1,T5,T15"
- fewer than 3 values -> last value fills the remaining periods ("2.5" -> 2.5, 2.5, 2.5)
- anything after the 3rd value (or after the last parsable value) is ignored
- validation runs once both warning and critical are known
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from loadcheck.errors import InvalidThreshold, ThresholdOrderViolation

PERIODS = (1, 5, 15)
DELIMITER = ","

# strtod-style prefix: leading whitespace, sign, mantissa, exponent
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ThresholdTriplet:
    """
    One limit per load-average period, index 0 = 1 minute
    """

    one: float
    five: float
    fifteen: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.one, self.five, self.fifteen))

    def __getitem__(self, index: int) -> float:
        return (self.one, self.five, self.fifteen)[index]

    def __len__(self) -> int:
        return 3

    @classmethod
    def uniform(cls, value: float) -> "ThresholdTriplet":
        return cls(value, value, value)


# Never supplied; fails validation with "not specified"
UNSET = ThresholdTriplet.uniform(-1.0)

# Warning default when only a critical triplet is given
DEFAULT_WARNING = ThresholdTriplet.uniform(0.0)


def _scan_tokens(text: str) -> list[float]:
    values: list[float] = []
    pos = 0
    while len(values) < 3:
        match = _FLOAT_PREFIX.match(text, pos)
        if match is None:
            break
        values.append(float(match.group()))
        pos = match.end()
        if text[pos : pos + 1] != DELIMITER:
            break
        pos += 1
    return values


def parse_threshold(text: str, label: str = "Warning") -> ThresholdTriplet:
    """
    Parse a threshold triplet with fill-forward defaulting

    Raises InvalidThreshold when not even one leading float is present.
    """
    values = _scan_tokens(text)
    if not values:
        raise InvalidThreshold(f"{label} threshold must be float or float triplet: {text!r}")

    while len(values) < 3:
        values.append(values[-1])

    return ThresholdTriplet(*values)


def validate_thresholds(warning: ThresholdTriplet, critical: ThresholdTriplet) -> None:
    """
    Check both triplets period by period

    Critical is checked first: a missing -c gives the most useful message.
    """
    for period, warn, crit in zip(PERIODS, warning, critical):
        if crit < 0:
            raise InvalidThreshold(
                f"Critical threshold for {period}-minute load average is not specified"
            )
        if warn < 0:
            raise InvalidThreshold(
                f"Warning threshold for {period}-minute load average is not specified"
            )
        if warn > crit:
            raise ThresholdOrderViolation(
                f'Parameter inconsistency: {period}-minute "warning load" is greater than "critical load"'
            )
