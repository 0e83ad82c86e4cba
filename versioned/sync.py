"""
sync.py

Responsibility: reconcile the version metadata embedded in a source file with
a `PackageMetadata` snapshot.

Each supported source convention is a `Dialect` with the same capability:
decide whether it applies to a file, scan the file line by line, and return the
rewritten text. Scanning is textual on purpose: the dialects only have to
recognize the declarations this tool itself asks projects to write, so no
language parser is involved.

Rules shared by all dialects:
- Lines that are not recognized declarations are copied through unchanged,
  line endings included.
- Only the quoted literal (or, for Python, the dunder line) is rewritten.
- A file is written only when at least one byte changed, and keeps its mode.
- Structural problems raise before anything is written.
"""

from __future__ import annotations

import enum
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from versioned.config import GoSettings
from versioned.errors import (
    PackageNotInitializedError,
    PackageNotReferencedError,
    UnsupportedFormatError,
    VersionFieldNotFoundError,
)
from versioned.files import ensure_regular_file, read_text, write_text
from versioned.logging import get_logger
from versioned.package import PackageMetadata

DOCS_URL = "https://github.com/greenpau/versioned"

log = get_logger("sync")


@dataclass(frozen=True)
class FieldUpdate:
    field: str
    old: str
    new: str


@dataclass(frozen=True)
class ScanResult:
    text: str
    updates: tuple[FieldUpdate, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.updates)


@dataclass(frozen=True)
class SyncResult:
    path: Path
    dialect: str
    updates: tuple[FieldUpdate, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.updates)


def _split_ending(line: str) -> tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body) :]


def _unquote(value: str) -> str:
    return value.strip().replace("'", "").replace('"', "")


class Dialect(ABC):
    """Base class for a source-file convention that embeds version metadata."""

    name = ""
    extensions: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()

    def matches(self, path: str | Path) -> bool:
        return Path(path).suffix.lower() in self.extensions

    def accepts(self, fmt: str) -> bool:
        return fmt.strip().lower() in self.aliases

    @abstractmethod
    def scan(self, text: str, pkg: PackageMetadata) -> ScanResult:
        """Return the reconciled text; raise StructuralMismatchError when the declaration is missing."""


class InitPhase(enum.Enum):
    BEFORE = "before"
    INSIDE = "inside"
    AFTER = "after"


@dataclass
class GoScanState:
    """Where the Go scanner is and what it has seen so far."""

    phase: InitPhase = InitPhase.BEFORE
    package_referenced: bool = False
    package_initialized: bool = False
    version_found: bool = False


# <receiver>.Set<Field>(<arg>, "<literal>")
_GO_SETTER = re.compile(r'\s*(\S.*)\.Set(\S+)\(\S+, "(.*)"')


class GoDialect(Dialect):
    """
    A Go `init()` function that constructs the package manager and then calls
    `SetVersion`, `SetGitBranch` and `SetGitCommit` with string literals.

    Only the first `func init() {` block is considered, and setter calls count
    only after the constructor line inside it.
    """

    name = "go"
    extensions = (".go",)
    aliases = ("go", "golang")

    def __init__(self, settings: GoSettings | None = None) -> None:
        self.settings = settings or GoSettings()

    def _targets(self, pkg: PackageMetadata) -> dict[str, str]:
        return {
            "Version": pkg.version,
            "GitBranch": pkg.git.branch,
            "GitCommit": pkg.git.commit,
        }

    def scan(self, text: str, pkg: PackageMetadata) -> ScanResult:
        module = self.settings.module
        constructor = self.settings.constructor
        targets = self._targets(pkg)
        state = GoScanState()
        out: list[str] = []
        updates: list[FieldUpdate] = []

        for line in text.splitlines(keepends=True):
            if module in line:
                state.package_referenced = True
            elif "func init() {" in line:
                state.phase = InitPhase.INSIDE if state.phase is InitPhase.BEFORE else InitPhase.AFTER
            elif state.phase is InitPhase.INSIDE:
                if line.startswith("}"):
                    state.phase = InitPhase.AFTER
                elif constructor in line:
                    state.package_initialized = True
                elif state.package_initialized:
                    line = self._apply_setter(line, targets, state, updates)
            out.append(line)

        if not state.package_referenced:
            raise PackageNotReferencedError(f"package {module} not found")
        if not state.package_initialized:
            raise PackageNotInitializedError(
                f"package {module} is not initialized. Please see {DOCS_URL}#package-metadata"
            )
        if not state.version_found:
            raise VersionFieldNotFoundError(f"package version not found. Please see {DOCS_URL}#package-metadata")
        return ScanResult(text="".join(out), updates=tuple(updates))

    @staticmethod
    def _apply_setter(
        line: str,
        targets: dict[str, str],
        state: GoScanState,
        updates: list[FieldUpdate],
    ) -> str:
        m = _GO_SETTER.search(line)
        if m is None or m.group(2) not in targets:
            return line
        field_name, current = m.group(2), m.group(3)
        if field_name == "Version":
            state.version_found = True
        wanted = targets[field_name]
        if current == wanted:
            return line
        updates.append(FieldUpdate(field_name, current, wanted))
        return line[: m.start(3)] + wanted + line[m.end(3) :]


class PythonDialect(Dialect):
    """A module level `__version__` dunder (PEP 8)."""

    name = "python"
    extensions = (".py",)
    aliases = ("py", "python")

    dunder = "__version__"

    def scan(self, text: str, pkg: PackageMetadata) -> ScanResult:
        found = False
        out: list[str] = []
        updates: list[FieldUpdate] = []

        for line in text.splitlines(keepends=True):
            if line.startswith(self.dunder):
                found = True
                body, ending = _split_ending(line)
                current = _unquote(body.split("=", 1)[1]) if "=" in body else ""
                if current != pkg.version:
                    updates.append(FieldUpdate("__version__", current, pkg.version))
                    line = f"{self.dunder} = '{pkg.version}'{ending}"
            out.append(line)

        if not found:
            raise VersionFieldNotFoundError(
                f"{self.dunder} module level dunder not found. Please see {DOCS_URL}#package-metadata"
            )
        return ScanResult(text="".join(out), updates=tuple(updates))


# Version: '<literal>' or Version: "<literal>"
_JS_VERSION = re.compile(r"""Version:\s*(?:'([^']*)'|"([^"]*)")""")


class JavaScriptDialect(Dialect):
    """
    A `Version: '...'` property inside an object literal (JS and TS).

    Every such line is reconciled; a `Version:` whose value is not a string
    literal (a variable, a multi-line expression) still counts as found but is
    left alone.
    """

    name = "javascript"
    extensions = (".js", ".mjs", ".ts", ".tsx")
    aliases = ("js", "javascript", "ts", "typescript")

    marker = "Version:"

    def scan(self, text: str, pkg: PackageMetadata) -> ScanResult:
        found = False
        out: list[str] = []
        updates: list[FieldUpdate] = []

        for line in text.splitlines(keepends=True):
            if self.marker in line:
                found = True
                m = _JS_VERSION.search(line)
                if m is not None:
                    group = 1 if m.group(1) is not None else 2
                    current = m.group(group)
                    if current != pkg.version:
                        updates.append(FieldUpdate("Version", current, pkg.version))
                        line = line[: m.start(group)] + pkg.version + line[m.end(group) :]
            out.append(line)

        if not found:
            raise VersionFieldNotFoundError(
                f"version not found. Please see {DOCS_URL}#nodejs-javascript-typescript"
            )
        return ScanResult(text="".join(out), updates=tuple(updates))


def default_dialects(go: GoSettings | None = None) -> list[Dialect]:
    return [GoDialect(go), PythonDialect(), JavaScriptDialect()]


def select_dialect(
    path: str | Path,
    fmt: str | None = None,
    dialects: Sequence[Dialect] | None = None,
) -> Dialect:
    """
    Pick the dialect for `path`. An explicit `fmt` (e.g. "py", "ts") wins over
    the file extension.
    """
    candidates: Iterable[Dialect] = dialects if dialects is not None else default_dialects()
    p = Path(path)
    if fmt:
        for dialect in candidates:
            if dialect.accepts(fmt):
                return dialect
        raise UnsupportedFormatError(f"synchronization format {fmt!r} is unsupported")
    for dialect in candidates:
        if dialect.matches(p):
            return dialect
    raise UnsupportedFormatError(
        f"file {p.name} in {p.parent} directory has unsupported file extension {p.suffix or '(none)'}"
    )


def sync_file(
    path: str | Path,
    pkg: PackageMetadata,
    fmt: str | None = None,
    dialects: Sequence[Dialect] | None = None,
) -> SyncResult:
    """
    Rewrite the version declaration in `path` to match `pkg`.

    The file is left untouched when it is already up to date or when any
    structural error is raised.
    """
    p = ensure_regular_file(path)
    dialect = select_dialect(p, fmt, dialects)
    result = dialect.scan(read_text(p), pkg)
    if result.changed:
        write_text(p, result.text)
        for update in result.updates:
            log.debug("%s: %s %r -> %r", p, update.field, update.old, update.new)
    else:
        log.debug("%s: already in sync", p)
    return SyncResult(path=p, dialect=dialect.name, updates=result.updates)
