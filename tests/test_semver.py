"""Tests for versioned.semver."""

from __future__ import annotations

from pathlib import Path

import pytest

from versioned.errors import (
    EmptyInputError,
    FileReadError,
    FileWriteError,
    InputValidationError,
    InvalidMajorError,
    InvalidMinorError,
    InvalidPatchError,
    MalformedVersionError,
)
from versioned.semver import Version, load_version, parse_version


@pytest.mark.parametrize(
    ("text", "actions", "expected"),
    [
        ("1.0.0", ["major"], "2.0.0"),
        ("1.0.0", ["minor"], "1.1.0"),
        ("1.0.0", ["patch"], "1.0.1"),
        ("1.0.0", ["major", "minor", "patch"], "2.1.1"),
        ("1.0.1", ["minor"], "1.1.0"),
        ("1.1.1", ["major"], "2.0.0"),
    ],
)
def test_increments(text: str, actions: list[str], expected: str) -> None:
    version = parse_version(text)
    for action in actions:
        getattr(version, f"increment_{action}")(1)
    assert str(version) == expected


@pytest.mark.parametrize(
    ("text", "error", "message"),
    [
        ("", EmptyInputError, "empty string"),
        ("1.1.1.1", MalformedVersionError, "version must be in major.minor.patch format"),
        ("1.1", MalformedVersionError, "version must be in major.minor.patch format"),
        ("1aZ.1.1", InvalidMajorError, "failed to parse major version"),
        ("1.1aZ.1", InvalidMinorError, "failed to parse minor version"),
        ("1.1.1aZ", InvalidPatchError, "failed to parse patch version"),
        ("-1.0.0", InvalidMajorError, "failed to parse major version"),
        ("1.+2.0", InvalidMinorError, "failed to parse minor version"),
        ("1.0. 3", InvalidPatchError, "failed to parse patch version"),
    ],
)
def test_parse_errors(text: str, error: type[Exception], message: str) -> None:
    with pytest.raises(error) as exc:
        Version.parse(text)
    assert str(exc.value) == message
    assert isinstance(exc.value, InputValidationError)


def test_parse_round_trip_and_default_file() -> None:
    version = Version.parse("10.20.30")
    assert (version.major, version.minor, version.patch) == (10, 20, 30)
    assert version.file_name == "VERSION"
    assert Version.parse(str(version)) == version
    assert version.to_bytes() == b"10.20.30"


def test_increment_uses_factor() -> None:
    version = Version.parse("1.2.3")
    version.increment_patch(5)
    assert str(version) == "1.2.8"
    version.increment_minor(2)
    assert str(version) == "1.4.0"
    version.increment_major(3)
    assert str(version) == "4.0.0"


def test_increment_rejects_non_positive_factor() -> None:
    version = Version.parse("1.2.3")
    with pytest.raises(InputValidationError):
        version.increment_major(0)
    assert str(version) == "1.2.3"


@pytest.mark.parametrize("name", ["VERSION", "PROP_VERSION", ""])
def test_file_round_trip(in_tmp: Path, name: str) -> None:
    target = in_tmp / (name or "VERSION")
    target.write_bytes(b"1.2.3")

    version = load_version(name)
    assert str(version) == "1.2.3"
    assert version.file_name == (name or "VERSION")

    version.update_file()
    assert target.read_bytes() == b"1.2.3"


def test_from_file_reads_only_first_trimmed_line(tmp_path: Path) -> None:
    path = tmp_path / "VERSION"
    path.write_text("  2.3.4  \nsomething else\n", encoding="utf-8")
    version = Version.from_file(str(path))
    assert str(version) == "2.3.4"
    assert version.file_name == str(path)


def test_from_file_missing(tmp_path: Path) -> None:
    path = tmp_path / "NOPE"
    with pytest.raises(FileReadError) as exc:
        Version.from_file(str(path))
    assert exc.value.path == str(path)
    assert isinstance(exc.value.cause, FileNotFoundError)


def test_update_file_truncates_and_bumps(tmp_path: Path) -> None:
    path = tmp_path / "VERSION"
    path.write_text("1.9.9\n# notes that will be dropped\n", encoding="utf-8")
    version = Version.from_file(str(path))
    version.increment_major()
    version.update_file()
    assert path.read_text(encoding="utf-8") == "2.0.0"


def test_update_file_write_error(tmp_path: Path) -> None:
    version = Version.parse("1.0.0")
    version.set_file(str(tmp_path / "missing-dir" / "VERSION"))
    with pytest.raises(FileWriteError):
        version.update_file()


def test_set_file_rejects_empty() -> None:
    with pytest.raises(InputValidationError):
        Version.parse("1.0.0").set_file("")


def test_from_file_not_utf8(tmp_path: Path) -> None:
    path = tmp_path / "VERSION"
    path.write_bytes(b"1.0.0\xff\n")
    with pytest.raises(FileReadError) as exc:
        Version.from_file(str(path))
    assert exc.value.path == str(path)
    assert isinstance(exc.value.cause, UnicodeDecodeError)
