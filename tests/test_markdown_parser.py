"""Unit tests for heading recognition, anchors and page TOC rendering.

These tests cover :mod:`mdinclude.markdown_parser`: which lines count as ATX
headings, how titles become GitHub-style anchors, and how the TOC indents
entries relative to the first heading it meets.

Usage
-----
Run ``pytest tests/test_markdown_parser.py -v``. No fixtures are required.
"""

from __future__ import annotations

import pytest

from mdinclude.markdown_parser import (
    Heading,
    build_toc_lines,
    first_heading_title,
    parse_heading,
    slugify,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("# Title\n", Heading(1, "Title")),
        ("###### Deep\n", Heading(6, "Deep")),
        ("   ## Three spaces\n", Heading(2, "Three spaces")),
        ("##   Padded title\n", Heading(2, "Padded title")),
    ],
)
def test_parse_heading_accepts_atx_headings(line: str, expected: Heading) -> None:
    """Lines with one to six hashes and a space are headings."""
    assert parse_heading(line) == expected


@pytest.mark.parametrize(
    "line",
    [
        "    # Indented code\n",
        "####### Seven\n",
        "#NoSpace\n",
        "Plain text # not a heading\n",
        "\n",
    ],
)
def test_parse_heading_rejects_other_lines(line: str) -> None:
    """Code-indented, over-deep and malformed lines are not headings."""
    assert parse_heading(line) is None, f"{line!r} should not parse as a heading"


def test_heading_link_targets_anchor() -> None:
    heading = Heading(2, "Getting Started")
    assert heading.link == "[Getting Started](#getting-started)"


@pytest.mark.parametrize(
    ("title", "anchor"),
    [
        ("Getting Started", "getting-started"),
        ("What's new?", "whats-new"),
        ("Use `include` (carefully)", "use-include-carefully"),
        ("C++ & Python", "c-python"),
        ("snake_case_title", "snake_case_title"),
    ],
)
def test_slugify_matches_github_anchors(title: str, anchor: str) -> None:
    assert slugify(title) == anchor


def test_slugify_is_deterministic_and_idempotent() -> None:
    title = "Files [and] {braces}. Really?"
    anchor = slugify(title)
    assert anchor == slugify(title)
    assert slugify(anchor) == anchor
    assert not set("#()[]{}.?+*`\"'") & set(anchor), (
        f"stripped punctuation leaked into {anchor!r}"
    )


def test_toc_nesting_is_relative_to_first_heading() -> None:
    lines = ["## A\n", "text\n", "### B\n", "## C\n"]
    assert build_toc_lines(lines) == [
        "- [A](#a)\n",
        "  - [B](#b)\n",
        "- [C](#c)\n",
    ]


def test_toc_never_indents_negatively() -> None:
    """Headings shallower than the first one are rendered flush left."""
    lines = ["### Deep\n", "# Top\n", "#### Deeper\n"]
    assert build_toc_lines(lines) == [
        "- [Deep](#deep)\n",
        "- [Top](#top)\n",
        "  - [Deeper](#deeper)\n",
    ]


def test_toc_skips_code_indented_headings() -> None:
    lines = ["# Real\n", "    # In code\n", "## Also real\n"]
    assert build_toc_lines(lines) == [
        "- [Real](#real)\n",
        "  - [Also real](#also-real)\n",
    ]


def test_first_heading_title() -> None:
    assert first_heading_title(["intro\n", "## Second\n", "# First\n"]) == "Second"
    assert first_heading_title(["no headings\n"]) is None
