r"""Recognise Markdown headings and turn them into a page table of contents.

This module powers the ``:page_toc`` directive and the deprecated
``create_page_toc`` operation. It parses ATX headings line by line, derives
GitHub-style anchors from their titles, and renders nested Markdown link
lists whose indentation is relative to the first heading encountered.

Example
-------
>>> from mdinclude.markdown_parser import build_toc_lines
>>> build_toc_lines(["## Intro\n", "### Details\n", "## Usage\n"])
['- [Intro](#intro)\n', '  - [Details](#details)\n', '- [Usage](#usage)\n']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

HEADING_START_PATTERN = re.compile(r"^#+ ")
SLUG_REMOVE_PATTERN = re.compile(r"[#()\[\]{}.?+*`\"']+")
SLUG_HYPHEN_PATTERN = re.compile(r"\W+")
MAX_HEADING_LEVEL = 6
CODE_INDENT = " " * 4


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """ATX heading recognised on a single line.

    Attributes
    ----------
    level : int
        Number of leading ``#`` characters, between 1 and 6.
    title : str
        Heading text following the hash marks.
    """

    level: int
    title: str

    @property
    def anchor(self) -> str:
        """Return the GitHub-style fragment identifier for this heading."""
        return slugify(self.title)

    @property
    def link(self) -> str:
        """Return a Markdown link targeting this heading within the page."""
        return f"[{self.title}](#{self.anchor})"


def parse_heading(line: str) -> Heading | None:
    """Return the heading on ``line`` or ``None`` when it is not a heading.

    Parameters
    ----------
    line : str
        A single line, with or without its line ending.

    Returns
    -------
    Heading or None
        ``None`` when the line is indented by four or more spaces (a code
        block), does not start with hash marks and a space, or uses more than
        six hash marks.
    """
    text = line.rstrip("\r\n")
    if text.startswith(CODE_INDENT):
        return None
    stripped = text.lstrip(" ")
    if not HEADING_START_PATTERN.match(stripped):
        return None
    hash_marks, _, remainder = stripped.partition(" ")
    level = len(hash_marks)
    if level > MAX_HEADING_LEVEL:
        return None
    return Heading(level=level, title=remainder.lstrip())


def slugify(title: str) -> str:
    """Convert a heading title into the anchor GitHub assigns to it."""
    removed = SLUG_REMOVE_PATTERN.sub("", title)
    return SLUG_HYPHEN_PATTERN.sub("-", removed).lower()


def iter_headings(lines: cabc.Iterable[str]) -> cabc.Iterator[Heading]:
    """Yield every valid heading found in ``lines``, in order."""
    for line in lines:
        heading = parse_heading(line)
        if heading is not None:
            yield heading


def build_toc_lines(lines: cabc.Iterable[str]) -> list[str]:
    """Render a nested Markdown list linking to the headings in ``lines``.

    The level of the first heading becomes the baseline; later headings are
    indented two spaces per level below it. Headings shallower than the
    baseline are rendered flush left.

    Parameters
    ----------
    lines : Iterable[str]
        Document lines to scan.

    Returns
    -------
    list[str]
        One newline-terminated list entry per heading.
    """
    toc_lines: list[str] = []
    baseline: int | None = None
    for heading in iter_headings(lines):
        if baseline is None:
            baseline = heading.level
        indentation = "  " * max(heading.level - baseline, 0)
        toc_lines.append(f"{indentation}- {heading.link}\n")
    return toc_lines


def first_heading_title(lines: cabc.Iterable[str]) -> str | None:
    """Return the title of the first valid heading in ``lines``, if any."""
    heading = next(iter_headings(lines), None)
    return heading.title if heading else None


__all__ = [
    "Heading",
    "build_toc_lines",
    "first_heading_title",
    "iter_headings",
    "parse_heading",
    "slugify",
]
