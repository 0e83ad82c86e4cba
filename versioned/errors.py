"""
errors.py

Responsibility: the exception hierarchy shared by every `versioned` module.

Engine code raises these to its caller and never logs-and-swallows them; only
the CLI turns them into a message and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class VersionedError(RuntimeError):
    pass


class InputValidationError(VersionedError, ValueError):
    pass


class EmptyInputError(InputValidationError):
    pass


class MalformedVersionError(InputValidationError):
    pass


class InvalidMajorError(InputValidationError):
    pass


class InvalidMinorError(InputValidationError):
    pass


class InvalidPatchError(InputValidationError):
    pass


class FileAccessError(VersionedError):
    """An OS-level failure touching `path`; the original error is kept as `cause`."""

    action = "accessing"

    def __init__(self, path: str | Path, cause: BaseException) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"error {self.action} {self.path} file: {cause}")


class FileReadError(FileAccessError):
    action = "reading"


class FileWriteError(FileAccessError):
    action = "writing"


class UnsupportedFormatError(VersionedError):
    pass


class StructuralMismatchError(VersionedError):
    pass


class PackageNotReferencedError(StructuralMismatchError):
    pass


class PackageNotInitializedError(StructuralMismatchError):
    pass


class VersionFieldNotFoundError(StructuralMismatchError):
    pass


class ConfigError(VersionedError, ValueError):
    pass


class VCSError(VersionedError):
    pass


class TocError(VersionedError):
    pass


class LicenseError(VersionedError):
    pass
