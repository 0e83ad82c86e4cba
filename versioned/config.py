"""
config.py

Responsibility: Load project settings from `.versioned.yml` and build-time
values from the environment into typed, immutable records.

Both records are constructed once at process start and passed explicitly to
the code that needs them; nothing here is stored in module globals.

Example `.versioned.yml`:

    version_file: VERSION
    readme: README.md
    go:
      module: github.com/greenpau/versioned
      constructor: versioned.NewPackageManager
    license:
      type: apache
      holder: Paul Greenberg (greenpau@outlook.com)
      year: 2020
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from versioned.errors import ConfigError

DEFAULT_CONFIG_FILE = ".versioned.yml"

ENV_PREFIX = "VERSIONED_"


@dataclass(frozen=True)
class GoSettings:
    """Markers the Go scanner looks for in a sync target."""

    module: str = "github.com/greenpau/versioned"
    constructor: str = "versioned.NewPackageManager"


@dataclass(frozen=True)
class LicenseSettings:
    type: str = "apache"
    holder: str | None = None
    year: int | None = None


@dataclass(frozen=True)
class Config:
    """Parsed `.versioned.yml`; CLI flags override these values."""

    version_file: str = "VERSION"
    readme: str = "README.md"
    go: GoSettings = field(default_factory=GoSettings)
    license: LicenseSettings = field(default_factory=LicenseSettings)


@dataclass(frozen=True)
class BuildInfo:
    """
    Values stamped in at build/release time (empty when not provided).

    Read from VERSIONED_APP_VERSION, VERSIONED_GIT_BRANCH, VERSIONED_GIT_COMMIT,
    VERSIONED_BUILD_USER, VERSIONED_BUILD_DATE, VERSIONED_BUILD_OS and
    VERSIONED_BUILD_ARCH.
    """

    app_version: str = ""
    git_branch: str = ""
    git_commit: str = ""
    build_user: str = ""
    build_date: str = ""
    build_os: str = ""
    build_arch: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BuildInfo:
        env = os.environ if environ is None else environ
        return cls(
            app_version=env.get(f"{ENV_PREFIX}APP_VERSION", "").strip(),
            git_branch=env.get(f"{ENV_PREFIX}GIT_BRANCH", "").strip(),
            git_commit=env.get(f"{ENV_PREFIX}GIT_COMMIT", "").strip(),
            build_user=env.get(f"{ENV_PREFIX}BUILD_USER", "").strip(),
            build_date=env.get(f"{ENV_PREFIX}BUILD_DATE", "").strip(),
            build_os=env.get(f"{ENV_PREFIX}BUILD_OS", "").strip(),
            build_arch=env.get(f"{ENV_PREFIX}BUILD_ARCH", "").strip(),
        )


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    raw = data.get(key) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"`{key}` must be an object/mapping when provided.")
    return raw


def _string(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    value = str(value).strip()
    return value or default


def _parse_go(raw: Mapping[str, Any]) -> GoSettings:
    defaults = GoSettings()
    return GoSettings(
        module=_string(raw, "module", defaults.module),
        constructor=_string(raw, "constructor", defaults.constructor),
    )


def _parse_license(raw: Mapping[str, Any]) -> LicenseSettings:
    holder = raw.get("holder")
    if holder is not None:
        holder = str(holder).strip() or None

    year_raw = raw.get("year")
    year: int | None = None
    if year_raw is not None:
        try:
            year = int(year_raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"`license.year` must be an integer, got {year_raw!r}") from e
        if year < 1:
            raise ConfigError(f"`license.year` must be positive, got {year}")

    return LicenseSettings(
        type=_string(raw, "type", LicenseSettings.type),
        holder=holder,
        year=year,
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """
    Parse `config_path` (default: `.versioned.yml` in the working directory).

    A missing default file yields the built-in defaults; an explicitly named
    file must exist.
    """
    explicit = config_path is not None
    path = Path(config_path if explicit else DEFAULT_CONFIG_FILE)
    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file does not exist: {path}")
        return Config()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed parsing {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed reading {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must be a mapping/object at the top level.")

    defaults = Config()
    return Config(
        version_file=_string(data, "version_file", defaults.version_file),
        readme=_string(data, "readme", defaults.readme),
        go=_parse_go(_mapping(data, "go")),
        license=_parse_license(_mapping(data, "license")),
    )
