"""
cli.py

Responsibility: CLI entrypoint for versioned.

High-level flow of a run:
1) `--version` / `--init` / license header actions short-circuit
2) Load the VERSION file -> `Version` (no action flags: print it and exit)
3) Increment major/minor/patch and write the file back
4) Regenerate the README table of contents (`--toc`)
5) Synchronize a source file with the version and git metadata (`--sync`)

This module should orchestrate behavior but keep concerns isolated:
- Version arithmetic and the VERSION file: `semver.py`
- Source rewriting: `sync.py`
- Git queries: `vcs.py`
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from versioned import __version__
from versioned.config import BuildInfo, Config, load_config
from versioned.errors import InputValidationError, VersionedError
from versioned.files import ensure_regular_file
from versioned.license import LicenseHeader, add_license, strip_license
from versioned.logging import configure_logging, get_logger
from versioned.package import PackageMetadata
from versioned.semver import Version
from versioned.sync import default_dialects, sync_file
from versioned.toc import update_toc
from versioned.vcs import GitClient

DOCUMENTATION_URL = "https://github.com/greenpau/versioned/"

log = get_logger("cli")


class CLIError(VersionedError):
    pass


def app_metadata(info: BuildInfo) -> PackageMetadata:
    return PackageMetadata.from_build_info(
        "versioned",
        info,
        version=__version__,
        git_branch="main",
        description="Simplified package metadata management.",
        documentation=DOCUMENTATION_URL,
    )


def _init_version_file(version_file: str) -> int:
    try:
        existing = Version.from_file(version_file)
    except VersionedError:
        existing = None
    if existing is not None:
        log.warning("version file already exists, version: %s", existing)
        return 0
    version = Version.parse("1.0.0")
    version.set_file(version_file)
    version.update_file()
    log.info("initialized %s with version %s", version_file, version)
    return 0


def _license_cmd(args: argparse.Namespace, config: Config) -> int:
    holder = args.copyright or config.license.holder or ""
    if args.add_license and not holder:
        raise CLIError("--copyright is required to add a license header (or set license.holder in the config)")
    for path, action in ((args.add_license, add_license), (args.strip_license, strip_license)):
        if not path:
            continue
        ensure_regular_file(path)
        header = LicenseHeader(
            file_path=path,
            copyright_holder=holder,
            license_type=args.license or config.license.type,
            year=args.year or config.license.year,
        )
        if action(header):
            log.info("%s: %s license header", path, "added" if action is add_license else "removed")
        else:
            log.debug("%s: license header unchanged", path)
    return 0


def _increment(version: Version, args: argparse.Namespace) -> None:
    previous = str(version)
    for part, enabled in (("major", args.major), ("minor", args.minor), ("patch", args.patch)):
        if not enabled:
            continue
        getattr(version, f"increment_{part}")(args.factor)
        log.info("increased %s version by %d, current version: %s", part, args.factor, version)
    version.update_file()
    log.info("updated version: %s, previous version: %s", version, previous)


def _sync_cmd(version: Version, args: argparse.Namespace, config: Config) -> None:
    path = ensure_regular_file(args.sync)
    git = GitClient()
    pkg = PackageMetadata(version=str(version))
    pkg.git.commit = git.describe()
    pkg.git.branch = git.branch()

    result = sync_file(path, pkg, fmt=args.format, dialects=default_dialects(config.go))
    if not result.changed:
        log.debug("%s is in sync with version %s", path, version)
        return
    for update in result.updates:
        log.info("%s: updated %s from %r to %r", path, update.field, update.old, update.new)


def run(args: argparse.Namespace) -> int:
    if args.version:
        print(app_metadata(BuildInfo.from_env()).banner())
        return 0
    if args.factor < 1:
        raise InputValidationError("--factor must be a positive integer")

    config = load_config(args.config)
    version_file = args.source or config.version_file

    if args.init:
        return _init_version_file(version_file)
    if args.add_license or args.strip_license:
        return _license_cmd(args, config)

    version = Version.from_file(version_file)
    incrementing = args.major or args.minor or args.patch

    if not (incrementing or args.sync or args.toc):
        print(version)
        return 0

    if incrementing:
        _increment(version, args)

    if args.toc:
        readme = args.readme or config.readme
        ensure_regular_file(readme)
        if update_toc(readme):
            log.info("%s: table of contents updated", readme)

    if args.sync:
        _sync_cmd(version, args, config)

    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="versioned",
        description="versioned - Simplified package metadata management.",
        epilog=f"Documentation: {DOCUMENTATION_URL}",
    )
    p.add_argument("--source", default=None, help="The \"source of truth\" file with version info (default: VERSION)")
    p.add_argument("--config", default=None, help="Settings file (default: .versioned.yml when present)")
    p.add_argument("--init", action="store_true", help="Initialize a new version file")

    p.add_argument("--major", action="store_true", help="Increment major version")
    p.add_argument("--minor", action="store_true", help="Increment minor version")
    p.add_argument("--patch", action="store_true", help="Increment patch version")
    p.add_argument("--factor", type=int, default=1, help="Increase factor (default: 1)")

    p.add_argument("--sync", default=None, metavar="FILE", help="Synchronize info from version file to FILE")
    p.add_argument(
        "--format",
        default=None,
        help="Synchronize according to specific language, i.e. py, js, go, ts (default: by file extension)",
    )

    p.add_argument("--toc", action="store_true", help="Update table of contents")
    p.add_argument("--readme", default=None, help="Markdown file for --toc (default: README.md)")

    p.add_argument("--add-license", default=None, metavar="FILE", help="Add license header to FILE")
    p.add_argument("--strip-license", default=None, metavar="FILE", help="Remove license header from FILE")
    p.add_argument("--license", default=None, help="License type: apache, asl, mit, gpl3 (default: apache)")
    p.add_argument("--copyright", default=None, help="Copyright holder for the license header")
    p.add_argument("--year", type=int, default=None, help="Copyright year (default: current year)")

    p.add_argument("--silent", action="store_true", help="Silent execution")
    p.add_argument("-v", "--verbose", action="store_true", help="Increase log verbosity for troubleshooting.")
    p.add_argument("--log-file", type=Path, default=None, help="Also write log messages to this file")
    p.add_argument("--version", action="store_true", help="Version information")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, silent=args.silent, log_file=args.log_file)
    try:
        return run(args)
    except VersionedError as e:
        log.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
