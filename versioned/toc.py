"""
toc.py

Responsibility: regenerate the "Table of Contents" section of a Markdown file
from its `##`-and-deeper headings.

The section lives between `<!-- begin-markdown-toc -->` and
`<!-- end-markdown-toc -->`. When the markers are missing the section is
inserted right before the first `##` heading.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from versioned.errors import TocError
from versioned.files import read_text, write_text
from versioned.logging import get_logger

BEGIN_MARKER = "<!-- begin-markdown-toc -->"
END_MARKER = "<!-- end-markdown-toc -->"
TOC_TITLE = "## Table of Contents"

_ALLOWED_LINK_CHARS = frozenset("0123456789abcdefghijklmnopqrstuvwxyz-")
_EOL = re.compile(r"\r\n|\n|\r")

log = get_logger("toc")


@dataclass(frozen=True)
class TocEntry:
    title: str
    depth: int


class TableOfContents:
    def __init__(self, bullet: str = "*") -> None:
        self.entries: list[TocEntry] = []
        self.bullet = bullet
        self.min_depth = 0
        self.max_depth = 0
        self._last_depth = 0

    def add_heading(self, line: str) -> None:
        if line == "":
            raise TocError("cannot add an empty string")
        if not line.strip().startswith("#"):
            raise TocError("heading must start with a pound")
        pounds, _, title = line.strip().partition(" ")
        title = title.strip()
        if not title:
            raise TocError(f"heading {line!r} has no title")
        depth = len(pounds)
        diff = depth - self._last_depth
        if diff > 1 and self._last_depth > 0:
            raise TocError(
                f"heading hopped more than one level: {diff}, {depth} (current) vs. {self._last_depth} (previous)"
            )
        self.min_depth = depth if not self.entries else min(self.min_depth, depth)
        self.max_depth = max(self.max_depth, depth)
        self._last_depth = depth
        self.entries.append(TocEntry(title=title, depth=depth))

    @staticmethod
    def _slug(title: str) -> str:
        chars = []
        for c in title.lower():
            if c == " ":
                chars.append("-")
            elif c in _ALLOWED_LINK_CHARS:
                chars.append(c)
        return "#" + "".join(chars)

    def lines(self) -> list[str]:
        seen: dict[str, int] = {}
        out: list[str] = []
        for entry in self.entries:
            link = self._slug(entry.title)
            count = seen.get(link)
            if count is None:
                seen[link] = 1
            else:
                # GitHub numbers repeated anchors: #x, #x-1, #x-2, ...
                seen[link] = count + 1
                link = f"{link}-{count}"
            indent = "  " * (entry.depth - self.min_depth)
            out.append(f"{indent}{self.bullet} [{entry.title}]({link})")
        return out

    def to_string(self) -> str:
        return "".join(f"{line}\n" for line in self.lines())

    def __len__(self) -> int:
        return len(self.entries)


def _render_block(toc: TableOfContents) -> list[str]:
    return [BEGIN_MARKER, TOC_TITLE, "", *toc.lines(), "", END_MARKER]


def _line_ending(text: str) -> str:
    m = _EOL.search(text)
    return m.group(0) if m else "\n"


def build_toc(markdown: str) -> str:
    """
    Return `markdown` with its table of contents regenerated.

    Lines outside the generated block keep their own endings; the block uses
    the first line ending found in the document.
    """
    toc = TableOfContents()
    kept: list[str] = []
    toc_index: int | None = None
    first_heading: int | None = None
    inside_toc = False
    in_code = False

    for raw in markdown.splitlines(keepends=True):
        line = raw.rstrip("\r\n")
        if inside_toc:
            if line.startswith(END_MARKER):
                inside_toc = False
            continue
        if line.startswith(BEGIN_MARKER):
            if toc_index is not None:
                raise TocError("toc error: found more than one begin marker")
            inside_toc = True
            toc_index = len(kept)
            continue
        if line.startswith(END_MARKER):
            raise TocError("toc error: found end marker without begin marker")
        if line.strip().startswith("```"):
            in_code = not in_code
        elif not in_code and line.startswith("##"):
            if first_heading is None:
                first_heading = len(kept)
            toc.add_heading(line)
        kept.append(raw)

    if inside_toc:
        raise TocError("toc error: failed to find end marker")

    eol = _line_ending(markdown)
    block = [line + eol for line in _render_block(toc)]
    if toc_index is not None:
        out = kept[:toc_index] + block + kept[toc_index:]
    elif first_heading is not None:
        out = kept[:first_heading] + block + [eol] + kept[first_heading:]
    else:
        return markdown
    return "".join(out)


def update_toc(path: str | Path) -> bool:
    """
    Regenerate the table of contents in `path`. Returns True when the file changed.
    """
    original = read_text(path)
    updated = build_toc(original)
    if updated == original:
        log.debug("%s: table of contents is up to date", path)
        return False
    write_text(path, updated)
    log.debug("%s: table of contents updated", path)
    return True
