"""loadcheck.collectors package exports."""

from loadcheck.collectors.cpu import logical_cpu_count, maybe_scale, scale_sample
from loadcheck.collectors.loadavg import LoadSample, select_load_source
from loadcheck.collectors.processes import ProcessReporter, select_listing_format

__all__ = [
    "LoadSample",
    "ProcessReporter",
    "logical_cpu_count",
    "maybe_scale",
    "scale_sample",
    "select_listing_format",
    "select_load_source",
]
