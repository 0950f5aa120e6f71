"""Unit tests for treatment classification and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdinclude.inclusions import InclusionRecord
from mdinclude.treatments import (
    Treatment,
    TreatmentKind,
    included_markers,
    render_treatment,
)


def _record(cited: str = "src/example.py", token: str = ":code_block") -> InclusionRecord:
    return InclusionRecord.from_directive(
        f"@[{token}]({cited})", Path("/project/README.md"), 4, cited, token
    )


@pytest.mark.parametrize(
    ("token", "kind"),
    [
        (":markdown", TreatmentKind.MARKDOWN),
        (":comment", TreatmentKind.COMMENT),
        (":pre", TreatmentKind.PRE),
        (":code_block", TreatmentKind.CODE_BLOCK),
        (":page_toc", TreatmentKind.PAGE_TOC),
        (":page_nav", TreatmentKind.PAGE_NAV),
        ("python", TreatmentKind.LANGUAGE),
        (":unknown", TreatmentKind.LANGUAGE),
    ],
)
def test_parse_classifies_tokens(token: str, kind: TreatmentKind) -> None:
    assert Treatment.parse(token).kind is kind


def test_verbatim_is_a_deprecated_markdown_alias() -> None:
    treatment = Treatment.parse(":verbatim")
    assert treatment.kind is TreatmentKind.MARKDOWN
    assert treatment.deprecated_token == ":verbatim"
    assert Treatment.parse(":markdown").deprecated_token is None


def test_labels_drop_the_leading_colon() -> None:
    assert Treatment.parse(":code_block").label == "code_block"
    assert Treatment.parse("ruby").label == "ruby"


def test_markdown_passes_through_unchanged() -> None:
    lines = ["# Heading\n", "@[:pre](x.txt)\n"]
    rendered = render_treatment(Treatment.parse(":markdown"), _record(), lines)
    assert rendered == lines


def test_comment_wraps_all_lines_in_one_comment() -> None:
    rendered = render_treatment(
        Treatment.parse(":comment"), _record(), ["first\n", "second\n"]
    )
    assert rendered == ["<!--first\nsecond\n-->\n"]


def test_pre_wraps_lines_in_pre_block() -> None:
    rendered = render_treatment(Treatment.parse(":pre"), _record(), ["a < b\n"])
    assert rendered == ["<pre>\n", "a < b\n", "</pre>\n"]


def test_code_block_has_label_and_bare_fence() -> None:
    rendered = render_treatment(
        Treatment.parse(":code_block"), _record(), ["x = 1\n"]
    )
    assert rendered == ["```example.py```:\n", "```\n", "x = 1\n", "```\n"]


def test_language_token_labels_the_fence() -> None:
    rendered = render_treatment(
        Treatment.parse("python"), _record(token="python"), ["x = 1\n"]
    )
    assert rendered[1] == "```python\n"


def test_control_treatments_cannot_be_rendered() -> None:
    with pytest.raises(ValueError, match="Control directive"):
        render_treatment(Treatment.parse(":page_toc"), _record(), [])


def test_included_markers() -> None:
    begin, end = included_markers(Treatment.parse(":pre"), "docs/a.txt")
    assert begin == "<!-- >>>>>> BEGIN INCLUDED FILE (pre): SOURCE docs/a.txt -->\n"
    assert end == "<!-- <<<<<< END INCLUDED FILE (pre): SOURCE docs/a.txt -->\n"
