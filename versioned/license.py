"""
license.py

Responsibility: add or strip the license header comment at the top of a
source file.

Rules:
- Header text comes from the Jinja2 templates in `versioned/templates/`,
  wrapped in the comment style of the file's extension.
- Adding is a no-op when the same header (ignoring year and whitespace) is
  already present; a different license/copyright header is an error.
- Python shebang and encoding lines stay on top of the header.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass, field
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from versioned.errors import LicenseError
from versioned.files import read_text, write_text
from versioned.logging import get_logger

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

LICENSE_CLUES = {
    "apache": "Licensed under the Apache License, Version 2.0",
    "asl": "Licensed under the Amazon Software License",
    "mit": "Licensed under the MIT License",
    "gpl3": "Licensed under the GPLv3 License",
}

_LICENSE_ALIASES = {"gplv3": "gpl3", "": "apache"}

# (opening line, line prefix, closing line)
_WRAP_CHARS = {
    ".go": ("", "// ", ""),
    ".swift": ("", "// ", ""),
    ".py": ("#", "# ", "#"),
    ".js": ("/**", " * ", " */"),
    ".ts": ("/**", " * ", " */"),
    ".tsx": ("/**", " * ", " */"),
    ".mjs": ("/**", " * ", " */"),
}

_SHEBANG = re.compile(r"#!/.*\n")
_CODING = re.compile(r"#.*coding[:=].*\n")
_YEAR = re.compile(r"\s(\d{4})\s")
_WHITESPACE = re.compile(r"\s+")

log = get_logger("license")

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def normalize_license_type(name: str) -> str:
    key = name.strip().lower()
    key = _LICENSE_ALIASES.get(key, key)
    if key not in LICENSE_CLUES:
        raise LicenseError(f"license type {name!r} is unsupported")
    return key


def _python_preamble_end(text: str) -> int:
    """Offset just past a leading shebang and/or encoding declaration."""
    end = 0
    for pattern in (_SHEBANG, _CODING):
        m = pattern.match(text, end)
        if m:
            end = m.end()
    return end


@dataclass
class LicenseHeader:
    file_path: str
    copyright_holder: str = ""
    license_type: str = "apache"
    year: int | None = None
    file_extension: str = ""
    raw: str = field(default="", init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.file_path:
            raise LicenseError("file path is empty")
        self.license_type = normalize_license_type(self.license_type)
        if self.year is None:
            self.year = datetime.date.today().year
        if self.year < 1:
            raise LicenseError("copyright year is empty")
        if not self.file_extension:
            self.file_extension = Path(self.file_path).suffix.lower()

    @property
    def wrap_chars(self) -> tuple[str, str, str]:
        if not self.file_extension:
            raise LicenseError(f"failed determining file extension for {self.file_path!r}")
        try:
            return _WRAP_CHARS[self.file_extension]
        except KeyError:
            raise LicenseError(
                f"license header unsupported for file extension {self.file_extension!r} in {self.file_path!r}"
            ) from None

    def build(self) -> str:
        """Render the commented header, followed by one blank line."""
        opening, prefix, closing = self.wrap_chars
        try:
            body = _env.get_template(f"{self.license_type}.j2").render(
                year=self.year,
                holder=self.copyright_holder.strip(),
            )
        except TemplateError as e:
            raise LicenseError(f"failed rendering {self.license_type} license template: {e}") from e

        lines: list[str] = []
        if opening:
            lines.append(opening)
        lines.extend((prefix + line).rstrip() for line in body.splitlines())
        if closing:
            lines.append(closing)
        self.raw = "\n".join(lines) + "\n\n"
        return self.raw


@dataclass(frozen=True)
class Inspection:
    found: bool = False
    match: bool = False
    mismatch: str = ""


def inspect_header(header: LicenseHeader, text: str) -> Inspection:
    """Compare the top of `text` with the header that would be written."""
    raw = header.raw or header.build()
    top = text[: len(raw) + 100]
    top = _SHEBANG.sub("", top)
    top = _CODING.sub("", top).strip()

    if LICENSE_CLUES[header.license_type] in top:
        if raw.strip() in top:
            return Inspection(found=True, match=True)
        # Approximate match: ignore the copyright year and all whitespace.
        actual = _WHITESPACE.sub("", _YEAR.sub(" ", top))
        expected = _WHITESPACE.sub("", _YEAR.sub(" ", raw))
        if expected in actual:
            return Inspection(found=True, match=True)
        return Inspection(found=True, mismatch=f"\n>>>got:\n{top}\n>>>expected:\n{raw}")
    if "Copyright " in top:
        return Inspection(found=True, mismatch=f"\n>>>got:\n{top}\n>>>expected:\n{raw}")
    return Inspection()


def add_license(header: LicenseHeader) -> bool:
    """
    Prepend the license header to the file. Returns True when the file changed.
    """
    if not header.copyright_holder.strip():
        raise LicenseError("copyright holder is empty")
    raw = header.build()
    text = read_text(header.file_path)
    result = inspect_header(header, text)
    if result.found:
        if not result.match:
            raise LicenseError(f"found license header mismatch in {header.file_path!r}, {result.mismatch}")
        log.debug("%s: license header already present", header.file_path)
        return False

    offset = _python_preamble_end(text) if header.file_extension == ".py" else 0
    if offset:
        updated = text[:offset] + "\n" + raw + text[offset:]
    else:
        updated = raw + text
    write_text(header.file_path, updated)
    log.debug("%s: added %s license header", header.file_path, header.license_type)
    return True


def strip_license(header: LicenseHeader) -> bool:
    """
    Remove the license header from the file. Returns True when the file changed.
    """
    header.build()
    text = read_text(header.file_path)
    if not inspect_header(header, text).found:
        return False

    closing = header.wrap_chars[2]
    start = _python_preamble_end(text) if header.file_extension == ".py" else 0
    body = text[start:]
    leading = len(body) - len(body.lstrip("\r\n")) if start else 0

    end = -1
    for blank in ("\n\n", "\r\r", "\r\n\r\n"):
        idx = body.find(closing + blank, leading)
        if idx > 0:
            end = idx + len(closing + blank)
            break
    if end < 1:
        return False

    write_text(header.file_path, text[:start] + body[end:])
    log.debug("%s: stripped license header", header.file_path)
    return True
