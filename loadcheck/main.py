"""
loadcheck.main
------------
AUTHOR: carter-vin

PURPOSE:
- Single-shot load average check for schedulers that speak the 4-state plugin protocol
- One report line on stdout, status as exit code (0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN)
- Optional top-N CPU consumers appended after the report line

Key contract:
- `check_load -w 5,4,3 -c 10,8,6` prints exactly one line and exits with the status
- any fatal condition prints `LOAD UNKNOWN - <reason>` and exits 3
"""

from __future__ import annotations

import sys
from typing import Any, Callable

import typer

from loadcheck.collectors.base import run_collector
from loadcheck.collectors.command import run_command
from loadcheck.collectors.cpu import logical_cpu_count, maybe_scale
from loadcheck.collectors.loadavg import LoadSample, select_load_source
from loadcheck.collectors.processes import ProcessReporter, select_listing_format
from loadcheck.errors import ArgumentError, CheckError
from loadcheck.evaluate import evaluate_load
from loadcheck.logging import emit_event
from loadcheck.model import build_report, error_report
from loadcheck.status import Status
from loadcheck.thresholds import (
    DEFAULT_WARNING,
    UNSET,
    ThresholdTriplet,
    parse_threshold,
    validate_thresholds,
)

app = typer.Typer(
    add_completion=False,
    help="check_load: test the current system load average",
    context_settings={"help_option_names": []},
)

CHECK_VERSION = "0.1.0"
PROGNAME = "check_load"

EventFn = Callable[..., None]


def _event_emitter(verbose: bool) -> EventFn:
    """
    Events only go out with --verbose; stdout stays a single report line
    """

    def _emit(event_type: str, **fields: Any) -> None:
        if verbose:
            emit_event(event_type, check_version=CHECK_VERSION, **fields)

    return _emit


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROGNAME} v{CHECK_VERSION}")
        raise typer.Exit(code=int(Status.UNKNOWN))


def _help_callback(ctx: typer.Context, value: bool) -> None:
    if value:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=int(Status.UNKNOWN))


def resolve_thresholds(
    warning: str | None,
    critical: str | None,
    positionals: list[str],
) -> tuple[ThresholdTriplet, ThresholdTriplet]:
    """
    Turn -w/-c (or the positional fallback) into validated triplets

    Positional fallback, only when neither -w nor -c was given:
    - one argument -> critical
    - two arguments -> warning, critical
    """
    if warning is None and critical is None:
        if len(positionals) == 2:
            warning, critical = positionals
        elif len(positionals) == 1:
            critical = positionals[0]
        elif positionals:
            raise ArgumentError(f"expected at most 2 positional thresholds, got {len(positionals)}")
    elif positionals:
        raise ArgumentError(f"unexpected arguments: {' '.join(positionals)}")

    warn = parse_threshold(warning, "Warning") if warning is not None else DEFAULT_WARNING
    crit = parse_threshold(critical, "Critical") if critical is not None else UNSET

    validate_thresholds(warn, crit)
    return warn, crit


def _sample_load(timeout: float | None, emit: EventFn) -> LoadSample:
    def _on_stderr(lines: list[str]) -> None:
        emit("command_stderr", collector="uptime", message="\n".join(lines))

    source = select_load_source(run_command, timeout=timeout, on_stderr=_on_stderr)
    try:
        return source.sample()
    except CheckError as e:
        emit(
            "collector_failed",
            collector=source.name,
            error_type=type(e).__name__,
            message=str(e),
        )
        raise


def _print_top_processes(limit: int, timeout: float | None, emit: EventFn) -> None:
    """
    Advisory: a failed listing is reported on stderr, exit status is untouched
    """
    reporter = ProcessReporter(select_listing_format(), run_command, timeout=timeout)
    outcome = run_collector("processes", reporter.report, limit)

    if not outcome.ok:
        emit(
            "process_report_failed",
            command=reporter.command,
            error_type=outcome.error_type,
            message=outcome.error_message,
        )
        typer.echo(outcome.error_message, err=True)
        return

    for line in outcome.value:
        typer.echo(line)


@app.command()
def check(
    thresholds: list[str] | None = typer.Argument(
        None,
        metavar="[WLOAD] [CLOAD]",
        help="Positional thresholds, used only when neither -w nor -c is given.",
        show_default=False,
    ),
    warning: str | None = typer.Option(
        None,
        "-w",
        "--warning",
        envvar="CHECK_LOAD_WARNING",
        metavar="WLOAD1,WLOAD5,WLOAD15",
        help="Exit with WARNING status if load average exceeds WLOADn.",
    ),
    critical: str | None = typer.Option(
        None,
        "-c",
        "--critical",
        envvar="CHECK_LOAD_CRITICAL",
        metavar="CLOAD1,CLOAD5,CLOAD15",
        help="Exit with CRITICAL status if load average exceeds CLOADn.",
    ),
    percpu: bool = typer.Option(
        False,
        "-r",
        "--percpu",
        envvar="CHECK_LOAD_PERCPU",
        help="Divide the load averages by the number of CPUs (when possible).",
    ),
    procs_to_show: int = typer.Option(
        0,
        "-n",
        "--procs-to-show",
        envvar="CHECK_LOAD_PROCS_TO_SHOW",
        metavar="NUMBER_OF_PROCS",
        help="Number of top CPU consuming processes to show. 0 disables this feature.",
    ),
    timeout: float | None = typer.Option(
        None,
        "-t",
        "--timeout",
        envvar="CHECK_LOAD_TIMEOUT",
        min=0.0,
        help="Seconds to wait for external commands (default: no limit).",
    ),
    verbose: bool = typer.Option(
        False,
        "-v",
        "--verbose",
        help="Emit JSON diagnostic events on stderr.",
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print version and exit.",
    ),
    help_: bool = typer.Option(
        False,
        "-h",
        "--help",
        callback=_help_callback,
        is_eager=True,
        expose_value=False,
        help="Print detailed help screen and exit.",
    ),
) -> None:
    """
    Check the 1/5/15-minute load averages against warning/critical thresholds
    """
    emit = _event_emitter(verbose)
    positionals = list(thresholds or [])

    emit("check_start", percpu=percpu, procs_to_show=procs_to_show)

    try:
        if warning is None and critical is None and not positionals and not percpu and procs_to_show == 0:
            raise ArgumentError(
                "Could not parse arguments. Usage: "
                f"{PROGNAME} [-r] -w WLOAD1,WLOAD5,WLOAD15 -c CLOAD1,CLOAD5,CLOAD15 [-n NUMBER_OF_PROCS]"
            )

        warn, crit = resolve_thresholds(warning, critical, positionals)
        emit("thresholds_parsed", warning=list(warn), critical=list(crit))

        sample = _sample_load(timeout, emit)
        emit("load_sampled", load=list(sample))

        scaled = None
        if percpu:
            cpu_count = logical_cpu_count()
            scaled = maybe_scale(sample, cpu_count)
            if scaled is not None:
                emit("load_scaled", cpu_count=cpu_count, load=list(scaled))

        status = evaluate_load(scaled if scaled is not None else sample, warn, crit)
        emit("status_evaluated", status=status.text)

        report = build_report(sample, warn, crit, status, scaled=scaled)

    except CheckError as e:
        typer.echo(error_report(str(e), e.status).render())
        emit("check_finished", status=e.status.text, error_type=type(e).__name__)
        raise typer.Exit(code=int(e.status))

    typer.echo(report.render())

    if procs_to_show > 0:
        _print_top_processes(procs_to_show, timeout, emit)

    emit("check_finished", status=status.text)
    raise typer.Exit(code=int(status))


def cli() -> None:
    """
    Console entry point

    Usage errors from option parsing exit UNKNOWN (3), not the default 2,
    which a scheduler would read as CRITICAL.
    """
    try:
        code = app(standalone_mode=False)
    except typer.TyperException as e:
        typer.echo(f"Error: {e.format_message()}", err=True)
        code = int(Status.UNKNOWN)
    sys.exit(code or 0)


# run command if invoked directly
if __name__ == "__main__":
    cli()
