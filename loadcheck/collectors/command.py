"""
loadcheck.collectors.command
AUTHOR: carter-vin

External command execution for collectors

- argv in, exit code + stdout/stderr lines out
- run-to-completion; optional timeout (default: wait forever)
- child runs with LC_ALL=C so numbers use '.' as decimal separator
- collectors take the runner as a parameter so tests never spawn processes
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from loadcheck.errors import UnavailableError


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: list[str]
    stderr: list[str]

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    def __call__(self, argv: Sequence[str], *, timeout: Optional[float] = None) -> CommandResult:
        ...


def _child_env() -> dict[str, str]:
    env = dict(os.environ)
    env["LC_ALL"] = "C"
    return env


def run_command(argv: Sequence[str], *, timeout: Optional[float] = None) -> CommandResult:
    """
    Run argv and capture its output

    Raises UnavailableError when the command cannot be started or times out.
    A non-zero exit code is returned, not raised; callers decide.
    """
    argv = tuple(argv)
    try:
        proc = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=_child_env(),
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise UnavailableError(f"'{' '.join(argv)}' timed out after {e.timeout}s") from e
    except OSError as e:
        raise UnavailableError(f"Error opening {argv[0]}: {e.strerror or e}") from e

    return CommandResult(
        argv=argv,
        returncode=proc.returncode,
        stdout=proc.stdout.splitlines(),
        stderr=proc.stderr.splitlines(),
    )
