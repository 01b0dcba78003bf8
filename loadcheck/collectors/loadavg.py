"""
loadcheck.collectors.loadavg
AUTHOR: carter-vin

Load average collector

Two strategies behind one seam, picked once at startup:
- native: os.getloadavg()
- uptime: parse "load average(s): a, b, c" from the uptime command

Both refuse negative readings (acquisition fault, not a real load).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Protocol, Sequence

from loadcheck.collectors.command import CommandRunner, run_command
from loadcheck.errors import UnavailableError

UPTIME_COMMAND = ("uptime",)

# A number may not stop mid-digits; numbers are split by a comma or whitespace
_NUM = r"([+-]?\d+(?:\.\d*)?)(?![\d.])"
_SEP = r"(?:,\s*|\s+)"

# Linux/Solaris print "load average:", BSD/macOS print "load averages:"
_UPTIME_LOAD = re.compile(r"load averages?:\s*" + _NUM + _SEP + _NUM + _SEP + _NUM)


@dataclass(frozen=True)
class LoadSample:
    load1: float
    load5: float
    load15: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.load1, self.load5, self.load15))

    def __getitem__(self, index: int) -> float:
        return (self.load1, self.load5, self.load15)[index]

    def __len__(self) -> int:
        return 3


class LoadAverageSource(Protocol):
    name: str

    def sample(self) -> LoadSample:
        ...


def _checked_sample(values: Sequence[float], source: str) -> LoadSample:
    if len(values) != 3:
        raise UnavailableError(f"{source} returned {len(values)} values instead of 3")
    if any(v < 0.0 for v in values):
        raise UnavailableError(f"Error processing {source}: negative load average")
    return LoadSample(*(float(v) for v in values))


class NativeLoadSource:
    """
    Kernel load averages via getloadavg(3)
    """

    name = "getloadavg"

    def __init__(self, getloadavg: Callable[[], Sequence[float]] = os.getloadavg) -> None:
        self._getloadavg = getloadavg

    def sample(self) -> LoadSample:
        try:
            values = tuple(self._getloadavg())
        except OSError as e:
            raise UnavailableError(f"Error in getloadavg(): {e}") from e
        return _checked_sample(values, "getloadavg()")


def parse_uptime_line(line: str) -> Optional[tuple[float, float, float]]:
    """
    Extract the three averages from one uptime output line

    Returns None when neither "load average:" nor "load averages:" is present.
    """
    match = _UPTIME_LOAD.search(line)
    if match is None:
        return None
    return float(match.group(1)), float(match.group(2)), float(match.group(3))


class UptimeLoadSource:
    """
    Fallback for platforms without getloadavg

    stderr from uptime is passed to on_stderr but does not fail the sample.
    """

    name = "uptime"

    def __init__(
        self,
        runner: CommandRunner = run_command,
        *,
        command: Sequence[str] = UPTIME_COMMAND,
        timeout: Optional[float] = None,
        on_stderr: Optional[Callable[[list[str]], None]] = None,
    ) -> None:
        self._runner = runner
        self._command = tuple(command)
        self._timeout = timeout
        self._on_stderr = on_stderr

    def sample(self) -> LoadSample:
        cmd = " ".join(self._command)
        result = self._runner(self._command, timeout=self._timeout)

        if result.stderr and self._on_stderr is not None:
            self._on_stderr(result.stderr)

        first_line = result.stdout[0] if result.stdout else ""
        values = parse_uptime_line(first_line)
        if values is None:
            raise UnavailableError(f"could not parse load from {cmd}: {first_line.strip()!r}")

        if not result.ok:
            raise UnavailableError(f"Error code {result.returncode} returned in {cmd}")

        return _checked_sample(values, cmd)


def select_load_source(
    runner: CommandRunner = run_command,
    *,
    timeout: Optional[float] = None,
    on_stderr: Optional[Callable[[list[str]], None]] = None,
) -> LoadAverageSource:
    """
    Pick the acquisition strategy by platform capability
    """
    if hasattr(os, "getloadavg"):
        return NativeLoadSource()
    return UptimeLoadSource(runner, timeout=timeout, on_stderr=on_stderr)
