"""
versioned package

Simplified package metadata management: a `major.minor.patch` VERSION file
as the source of truth, propagated into Go, Python and JavaScript/TypeScript
sources.

Key responsibilities are split across modules:
- `semver.py`: parse/format/increment versions and read/write the VERSION file
- `package.py`: package metadata (version, git branch/commit, build info) and banners
- `sync.py`: per-language scanners that reconcile embedded version declarations
- `vcs.py`: git commands that supply branch/commit strings
- `toc.py`: Markdown table of contents regeneration
- `license.py`: license header injection/removal
- `config.py`: `.versioned.yml` and build-time settings
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.23"
