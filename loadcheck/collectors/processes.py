"""
loadcheck.collectors.processes
AUTHOR: carter-vin

Top CPU consumers from the platform's ps listing

- line 0 is the header and always stays first
- rows are ranked by %CPU (descending, stable) when the listing has that column
- rows are emitted verbatim, never reformatted
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Optional, Sequence

from loadcheck.collectors.command import CommandRunner, run_command
from loadcheck.errors import UnavailableError


@dataclass(frozen=True)
class ProcessListingFormat:
    """
    How to list processes on one platform
    - argv: ps invocation
    - pcpu_column: whitespace-split field index of %CPU, None if not sortable
    """

    argv: tuple[str, ...]
    pcpu_column: Optional[int] = None


LINUX_PS = ProcessListingFormat(
    argv=("ps", "axwo", "stat,uid,pid,ppid,vsz,rss,pcpu,etime,comm,args"),
    pcpu_column=6,
)
BSD_PS = ProcessListingFormat(
    argv=("ps", "-axwo", "state,uid,pid,ppid,vsz,rss,pcpu,ucomm,command"),
    pcpu_column=6,
)
SUNOS_PS = ProcessListingFormat(
    argv=("ps", "-Ao", "s,uid,pid,ppid,vsz,rss,pcpu,etime,comm,args"),
    pcpu_column=6,
)
GENERIC_PS = ProcessListingFormat(argv=("ps", "-ef"), pcpu_column=None)

_FORMATS_BY_SYSTEM = {
    "Linux": LINUX_PS,
    "Darwin": BSD_PS,
    "FreeBSD": BSD_PS,
    "OpenBSD": BSD_PS,
    "NetBSD": BSD_PS,
    "DragonFly": BSD_PS,
    "SunOS": SUNOS_PS,
}


def select_listing_format(system: Optional[str] = None) -> ProcessListingFormat:
    if system is None:
        system = platform.system()
    return _FORMATS_BY_SYSTEM.get(system, GENERIC_PS)


@dataclass(frozen=True)
class ProcessRecord:
    line: str
    pcpu: float


def _parse_pcpu(line: str, column: int) -> float:
    fields = line.split()
    if len(fields) <= column:
        return 0.0
    try:
        return float(fields[column])
    except ValueError:
        return 0.0


def rank_by_cpu(lines: Sequence[str], column: int) -> list[str]:
    """
    Header first, then data rows by %CPU descending (ties keep listing order)
    """
    header, rows = lines[0], lines[1:]
    records = [ProcessRecord(line=row, pcpu=_parse_pcpu(row, column)) for row in rows]
    records.sort(key=lambda r: r.pcpu, reverse=True)
    return [header] + [r.line for r in records]


class ProcessReporter:
    def __init__(
        self,
        listing_format: Optional[ProcessListingFormat] = None,
        runner: CommandRunner = run_command,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self._format = listing_format if listing_format is not None else select_listing_format()
        self._runner = runner
        self._timeout = timeout

    @property
    def command(self) -> str:
        return " ".join(self._format.argv)

    def report(self, limit: int) -> list[str]:
        """
        Header plus the top `limit` rows of the listing

        Raises UnavailableError on non-zero exit or a listing without data rows.
        """
        result = self._runner(self._format.argv, timeout=self._timeout)
        if not result.ok:
            raise UnavailableError(f"'{self.command}' exited with non-zero status.")
        if len(result.stdout) < 2:
            raise UnavailableError("some error occurred getting procs list.")

        lines = result.stdout
        if self._format.pcpu_column is not None:
            lines = rank_by_cpu(lines, self._format.pcpu_column)

        return lines[: min(len(lines), limit + 1)]
