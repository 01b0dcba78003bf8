"""
loadcheck.model
AUTHOR: carter-vin

Report line + performance data rendering.

Output grammar (one line):
  LOAD <STATUS> - [scaled load average: S1, S5, S15 - ]total load average: L1, L5, L15|<perfdata>

Design goals:
- Explicit structure, rendered in one place
- Deterministic metric ordering (1, 5, 15; raw before scaled)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from loadcheck.collectors.loadavg import LoadSample
from loadcheck.status import Status
from loadcheck.thresholds import PERIODS, ThresholdTriplet

SERVICE_NAME = "LOAD"


def _fmt_value(value: Optional[float]) -> str:
    return "" if value is None else f"{value:.3f}"


@dataclass(frozen=True)
class PerfMetric:
    """
    One performance data entry: name=value;warn;crit;min;max
    - empty warn/crit when the metric carries no thresholds
    """

    name: str
    value: float
    warning: Optional[float] = None
    critical: Optional[float] = None
    minimum: Optional[float] = 0.0
    maximum: Optional[float] = None

    def render(self) -> str:
        minimum = "" if self.minimum is None else f"{self.minimum:g}"
        return (
            f"{self.name}={self.value:.3f};"
            f"{_fmt_value(self.warning)};"
            f"{_fmt_value(self.critical)};"
            f"{minimum};"
            f"{_fmt_value(self.maximum)}"
        )


@dataclass(frozen=True)
class ReportLine:
    status: Status
    message: str
    metrics: tuple[PerfMetric, ...] = ()

    def render(self) -> str:
        line = f"{SERVICE_NAME} {self.status.text} - {self.message}"
        if self.metrics:
            line += "|" + " ".join(m.render() for m in self.metrics)
        return line


def _averages_text(sample: LoadSample) -> str:
    return f"load average: {sample.load1:.2f}, {sample.load5:.2f}, {sample.load15:.2f}"


def build_report(
    sample: LoadSample,
    warning: ThresholdTriplet,
    critical: ThresholdTriplet,
    status: Status,
    *,
    scaled: Optional[LoadSample] = None,
) -> ReportLine:
    """
    Assemble the status message and metrics

    With a scaled sample the thresholds move to scaled_loadN and the raw
    loadN metrics are reported without thresholds.
    """
    message = f"total {_averages_text(sample)}"
    if scaled is not None:
        message = f"scaled {_averages_text(scaled)} - {message}"

    metrics: list[PerfMetric] = []
    for i, period in enumerate(PERIODS):
        if scaled is None:
            metrics.append(PerfMetric(f"load{period}", sample[i], warning[i], critical[i]))
        else:
            metrics.append(PerfMetric(f"load{period}", sample[i]))
            metrics.append(PerfMetric(f"scaled_load{period}", scaled[i], warning[i], critical[i]))

    return ReportLine(status=status, message=message, metrics=tuple(metrics))


def error_report(message: str, status: Status = Status.UNKNOWN) -> ReportLine:
    """
    One-line explanation for a run that could not produce a report
    """
    return ReportLine(status=status, message=message)
