"""
loadcheck.collectors.base
AUTHOR: carter-vin

Light result wrapper -> caller decides whether a collector failure is fatal
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from loadcheck.errors import CheckError


@dataclass(frozen=True)
class CollectorOutcome:
    """
    Normalized collector result
    - ok: false=failure, error details in error fields
    - value: collector result object if ok=true
    """

    name: str
    ok: bool
    value: Optional[Any] = None
    error: Optional[CheckError] = None

    @property
    def error_type(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


def run_collector(name: str, fn, *args, **kwargs) -> CollectorOutcome:
    """
    Run collector & collect check failures as data

    Only CheckError is captured; anything else is a bug and propagates.
    """
    try:
        v = fn(*args, **kwargs)
        return CollectorOutcome(name=name, ok=True, value=v)
    except CheckError as e:
        return CollectorOutcome(name=name, ok=False, error=e)
