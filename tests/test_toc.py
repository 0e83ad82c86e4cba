"""Tests for versioned.toc."""

from __future__ import annotations

from pathlib import Path

import pytest

from versioned.errors import TocError
from versioned.toc import BEGIN_MARKER, END_MARKER, TableOfContents, build_toc, update_toc


def test_table_of_contents_links_and_indentation() -> None:
    toc = TableOfContents()
    for heading in [
        "## Heading 2",
        "### Heading 3",
        "#### Heading 4",
        "## Heading 2",
        "### Heading_3",
        "### Heading~3",
    ]:
        toc.add_heading(heading)

    assert toc.to_string() == (
        "* [Heading 2](#heading-2)\n"
        "  * [Heading 3](#heading-3)\n"
        "    * [Heading 4](#heading-4)\n"
        "* [Heading 2](#heading-2-1)\n"
        "  * [Heading_3](#heading3)\n"
        "  * [Heading~3](#heading3-1)\n"
    )
    # rendering twice gives the same anchors
    assert toc.to_string() == toc.to_string()
    assert len(toc) == 6


@pytest.mark.parametrize(
    ("heading", "message"),
    [
        ("", "cannot add an empty string"),
        ("Heading 1", "heading must start with a pound"),
        ("##", "has no title"),
    ],
)
def test_add_heading_errors(heading: str, message: str) -> None:
    with pytest.raises(TocError, match=message):
        TableOfContents().add_heading(heading)


def test_add_heading_rejects_level_hopping() -> None:
    toc = TableOfContents()
    toc.add_heading("## Heading 2")
    with pytest.raises(TocError, match="hopped more than one level"):
        toc.add_heading("#### Heading 4")


README = """\
# Project

Intro text.

## Getting Started

### Install

```sh
## not a heading
```

## License
"""


def test_build_toc_inserts_before_first_heading() -> None:
    updated = build_toc(README)
    assert updated == (
        "# Project\n\nIntro text.\n\n"
        f"{BEGIN_MARKER}\n"
        "## Table of Contents\n\n"
        "* [Getting Started](#getting-started)\n"
        "  * [Install](#install)\n"
        "* [License](#license)\n\n"
        f"{END_MARKER}\n\n"
        "## Getting Started\n\n### Install\n\n```sh\n## not a heading\n```\n\n## License\n"
    )


def test_build_toc_is_idempotent() -> None:
    once = build_toc(README)
    assert build_toc(once) == once


def test_build_toc_replaces_outdated_block() -> None:
    once = build_toc(README)
    changed = once.replace("## License\n", "## License\n\n## Support\n")
    twice = build_toc(changed)
    assert "* [Support](#support)\n" in twice
    assert twice.count(BEGIN_MARKER) == 1


def test_build_toc_without_headings_is_noop() -> None:
    assert build_toc("# Title\n\ntext\n") == "# Title\n\ntext\n"


def test_build_toc_missing_end_marker() -> None:
    with pytest.raises(TocError, match="failed to find end marker"):
        build_toc(f"# T\n{BEGIN_MARKER}\n## Table of Contents\n## A\n")


def test_update_toc_writes_only_when_changed(tmp_path: Path) -> None:
    path = tmp_path / "README.md"
    path.write_text(README, encoding="utf-8")
    assert update_toc(path) is True
    assert update_toc(path) is False
    assert BEGIN_MARKER in path.read_text(encoding="utf-8")


def test_build_toc_keeps_crlf_line_endings() -> None:
    updated = build_toc("# T\r\n\r\n## A\r\n\r\ntext\r\n")
    assert updated == (
        "# T\r\n\r\n"
        f"{BEGIN_MARKER}\r\n"
        "## Table of Contents\r\n\r\n"
        "* [A](#a)\r\n\r\n"
        f"{END_MARKER}\r\n\r\n"
        "## A\r\n\r\ntext\r\n"
    )
    assert "\n" not in updated.replace("\r\n", "")
    assert build_toc(updated) == updated


def test_update_toc_keeps_crlf_on_disk(tmp_path: Path) -> None:
    path = tmp_path / "README.md"
    path.write_bytes(b"# T\r\n\r\n## A\r\n\r\ntext\r\n")
    assert update_toc(path) is True
    data = path.read_bytes()
    assert data.count(b"\n") == data.count(b"\r\n")
    assert data.endswith(b"## A\r\n\r\ntext\r\n")
    assert update_toc(path) is False
