"""
package.py

Responsibility: package metadata (name, version, git and build details) and
the banners printed for `--version`.

Every setter takes `(value, default)`: a non-empty value wins, otherwise the
default is stored.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass, field

from versioned.config import BuildInfo


@dataclass
class GitMetadata:
    branch: str = ""
    commit: str = ""


@dataclass
class BuildMetadata:
    operating_system: str = ""
    architecture: str = ""
    user: str = ""
    date: str = ""


def _runtime() -> str:
    return f"{platform.system().lower()}/{platform.machine().lower()} Python {platform.python_version()}"


@dataclass
class PackageMetadata:
    name: str = ""
    version: str = ""
    description: str = ""
    documentation: str = ""
    git: GitMetadata = field(default_factory=GitMetadata)
    build: BuildMetadata = field(default_factory=BuildMetadata)

    @classmethod
    def from_build_info(
        cls,
        name: str,
        info: BuildInfo,
        *,
        version: str = "",
        git_branch: str = "",
        git_commit: str = "",
        description: str = "",
        documentation: str = "",
    ) -> PackageMetadata:
        """
        Build metadata from build-time values, falling back to the given defaults.
        """
        pkg = cls(name=name, description=description, documentation=documentation)
        pkg.set_version(info.app_version, version)
        pkg.set_git_branch(info.git_branch, git_branch)
        pkg.set_git_commit(info.git_commit, git_commit)
        pkg.set_build_user(info.build_user, "")
        pkg.set_build_date(info.build_date, "")
        pkg.set_build_os(info.build_os, "")
        pkg.set_build_arch(info.build_arch, "")
        return pkg

    def set_version(self, value: str, default: str) -> None:
        self.version = value or default

    def set_git_branch(self, value: str, default: str) -> None:
        self.git.branch = value or default

    def set_git_commit(self, value: str, default: str) -> None:
        self.git.commit = value or default

    def set_build_user(self, value: str, default: str) -> None:
        self.build.user = value or default

    def set_build_date(self, value: str, default: str) -> None:
        self.build.date = value or default

    def set_build_os(self, value: str, default: str) -> None:
        self.build.operating_system = value or default

    def set_build_arch(self, value: str, default: str) -> None:
        self.build.architecture = value or default

    def banner(self) -> str:
        parts = [f"{self.name} {self.version}"]
        if self.git.branch:
            parts.append(f", branch: {self.git.branch}")
        if self.git.commit:
            parts.append(f", commit: {self.git.commit}")
        if self.build.user and self.build.date:
            parts.append(f", build on {self.build.date} by {self.build.user}")
            if self.build.operating_system and self.build.architecture:
                parts.append(f" for {self.build.operating_system}/{self.build.architecture}")
            parts.append(f" ({_runtime()})")
        return "".join(parts)

    def short_banner(self) -> str:
        return f"{self.name} {self.version}"

    def __str__(self) -> str:
        return self.banner()
