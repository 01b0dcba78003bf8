"""
loadcheck.status
AUTHOR: carter-vin

Check status vocabulary

Values double as process exit codes (4-state plugin convention)
"""

from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def text(self) -> str:
        return self.name
