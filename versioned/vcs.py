"""
vcs.py

Responsibility: obtain the branch and commit strings that get stamped into
synchronized sources.

Git is treated as an opaque text producer: each query runs one command and
keeps the first line of its standard output. Any failure to run the command
is fatal for the caller.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Sequence

from versioned.errors import VCSError
from versioned.logging import get_logger

Runner = Callable[[Sequence[str], Path | None], str]

log = get_logger("vcs")


def _default_runner(cmd: Sequence[str], cwd: Path | None) -> str:
    """
    Run a subprocess command and return its stdout, raising VCSError on failure.
    """
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=str(cwd) if cwd else None,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError as e:
        raise VCSError(f"Error executing {' '.join(cmd)}: {e}") from e
    except subprocess.CalledProcessError as e:
        raise VCSError(f"Error executing {' '.join(cmd)}: exit status {e.returncode}\n\n{e.stderr}") from e
    return proc.stdout


class GitClient:
    def __init__(self, runner: Runner | None = None, cwd: str | Path | None = None) -> None:
        self._runner = runner or _default_runner
        self._cwd = Path(cwd) if cwd else None

    def _first_line(self, cmd: list[str]) -> str:
        out = self._runner(cmd, self._cwd)
        line = out.split("\n")[0].strip()
        log.debug("%s -> %r", " ".join(cmd), line)
        return line

    def describe(self) -> str:
        """Commit description, e.g. `v1.0.22-3-g230de95`."""
        return self._first_line(["git", "describe", "--always"])

    def branch(self) -> str:
        return self._first_line(["git", "rev-parse", "--abbrev-ref", "HEAD", "--"])
