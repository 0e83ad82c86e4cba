"""
semver.py

Responsibility: the `major.minor.patch` version triple and the VERSION file
it lives in.

The textual form is always exactly `{major}.{minor}.{patch}`; pre-release
and build suffixes are not supported. The same string is the complete
on-disk content of the version file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from versioned.errors import (
    EmptyInputError,
    InputValidationError,
    InvalidMajorError,
    InvalidMinorError,
    InvalidPatchError,
    MalformedVersionError,
)
from versioned.files import read_first_line, write_text
from versioned.logging import get_logger

DEFAULT_VERSION_FILE = "VERSION"

_NUMBER = re.compile(r"[0-9]+")

log = get_logger("semver")


def _parse_component(part: str, error: type[InputValidationError], label: str) -> int:
    if not _NUMBER.fullmatch(part):
        raise error(f"failed to parse {label} version")
    return int(part)


def _check_step(by: int) -> int:
    if by < 1:
        raise InputValidationError(f"increment factor must be a positive integer, got {by}")
    return by


@dataclass
class Version:
    """A software version bound to the file it was read from / is written to."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    file_name: str = DEFAULT_VERSION_FILE

    @classmethod
    def parse(cls, text: str) -> Version:
        if text == "":
            raise EmptyInputError("empty string")
        parts = text.split(".")
        if len(parts) != 3:
            raise MalformedVersionError("version must be in major.minor.patch format")
        return cls(
            major=_parse_component(parts[0], InvalidMajorError, "major"),
            minor=_parse_component(parts[1], InvalidMinorError, "minor"),
            patch=_parse_component(parts[2], InvalidPatchError, "patch"),
        )

    @classmethod
    def from_file(cls, path: str = "") -> Version:
        """
        Read the version from the first line of `path` (default: VERSION).
        """
        path = path or DEFAULT_VERSION_FILE
        version = cls.parse(read_first_line(path))
        version.file_name = path
        log.debug("loaded version %s from %s", version, path)
        return version

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_bytes(self) -> bytes:
        return str(self).encode("utf-8")

    def increment_major(self, by: int = 1) -> None:
        self.major += _check_step(by)
        self.minor = 0
        self.patch = 0

    def increment_minor(self, by: int = 1) -> None:
        self.minor += _check_step(by)
        self.patch = 0

    def increment_patch(self, by: int = 1) -> None:
        self.patch += _check_step(by)

    def set_file(self, path: str) -> None:
        if not path:
            raise InputValidationError("version file path is empty")
        self.file_name = path

    def update_file(self) -> None:
        """Write the version as the entire content of the bound file."""
        write_text(self.file_name, str(self))
        log.debug("wrote version %s to %s", self, self.file_name)


def parse_version(text: str) -> Version:
    return Version.parse(text)


def load_version(path: str = "") -> Version:
    return Version.from_file(path)
