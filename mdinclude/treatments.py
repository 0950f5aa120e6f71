"""Classify treatment tokens and render included files accordingly.

Every directive names a treatment. The built-in tokens start with a colon
(``:markdown``, ``:comment``, ``:pre``, ``:code_block`` and the control
directives ``:page_toc`` and ``:page_nav``); any other token is taken as the
language label of a fenced code block, so ``@[python](setup.py)`` renders a
``python`` fence.

Example
-------
>>> from mdinclude.treatments import Treatment, TreatmentKind
>>> Treatment.parse(":pre").kind is TreatmentKind.PRE
True
>>> Treatment.parse("ruby").label
'ruby'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import os
import typing as typ

from ._constants import INCLUDED_BEGIN_TEMPLATE, INCLUDED_END_TEMPLATE, comment

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .inclusions import InclusionRecord


class TreatmentKind(enum.Enum):
    """Closed set of rendering strategies."""

    MARKDOWN = "markdown"
    COMMENT = "comment"
    PRE = "pre"
    CODE_BLOCK = "code_block"
    LANGUAGE = "language"
    PAGE_TOC = "page_toc"
    PAGE_NAV = "page_nav"


BUILTIN_TOKENS: dict[str, TreatmentKind] = {
    ":markdown": TreatmentKind.MARKDOWN,
    ":verbatim": TreatmentKind.MARKDOWN,
    ":comment": TreatmentKind.COMMENT,
    ":pre": TreatmentKind.PRE,
    ":code_block": TreatmentKind.CODE_BLOCK,
    ":page_toc": TreatmentKind.PAGE_TOC,
    ":page_nav": TreatmentKind.PAGE_NAV,
}
DEPRECATED_TOKENS: dict[str, str] = {":verbatim": ":markdown"}


@dc.dataclass(frozen=True, slots=True)
class Treatment:
    """A parsed treatment token.

    Attributes
    ----------
    kind : TreatmentKind
        Rendering strategy.
    language : str or None
        Fence label for :attr:`TreatmentKind.LANGUAGE`; ``None`` otherwise.
    deprecated_token : str or None
        The deprecated alias that was written, if any.
    """

    kind: TreatmentKind
    language: str | None = None
    deprecated_token: str | None = None

    @classmethod
    def parse(cls, token: str) -> Treatment:
        """Classify ``token``; unknown tokens become language labels."""
        kind = BUILTIN_TOKENS.get(token)
        if kind is None:
            return cls(TreatmentKind.LANGUAGE, language=token)
        deprecated = token if token in DEPRECATED_TOKENS else None
        return cls(kind, deprecated_token=deprecated)

    @property
    def label(self) -> str:
        """Return the name used in generated BEGIN/END comments."""
        if self.kind is TreatmentKind.LANGUAGE and self.language:
            return self.language
        return self.kind.value

    @property
    def is_control(self) -> bool:
        """Return True for directives that steer generation rather than include."""
        return self.kind in {TreatmentKind.PAGE_TOC, TreatmentKind.PAGE_NAV}


def included_markers(treatment: Treatment, source: str) -> tuple[str, str]:
    """Return the BEGIN and END comment lines bracketing an inclusion."""
    begin = INCLUDED_BEGIN_TEMPLATE.format(treatment=treatment.label, source=source)
    end = INCLUDED_END_TEMPLATE.format(treatment=treatment.label, source=source)
    return comment(begin), comment(end)


def render_treatment(
    treatment: Treatment,
    record: InclusionRecord,
    lines: cabc.Sequence[str],
) -> list[str]:
    """Render the lines of an included file according to ``treatment``.

    Parameters
    ----------
    treatment : Treatment
        Parsed treatment of the directive.
    record : InclusionRecord
        The directive occurrence; its cited path labels code blocks.
    lines : Sequence[str]
        Lines of the included file, with line endings.

    Returns
    -------
    list[str]
        Output lines. Markdown is returned unchanged; the resolver expands
        nested directives in it separately.

    Raises
    ------
    ValueError
        If ``treatment`` is a control directive, which has no content.
    """
    match treatment.kind:
        case TreatmentKind.MARKDOWN:
            return list(lines)
        case TreatmentKind.COMMENT:
            return [comment("".join(lines))]
        case TreatmentKind.PRE:
            return ["<pre>\n", "".join(lines), "</pre>\n"]
        case TreatmentKind.CODE_BLOCK | TreatmentKind.LANGUAGE:
            file_name = os.path.basename(record.cited_path)
            language = treatment.language or ""
            return [f"```{file_name}```:\n", f"```{language}\n", *lines, "```\n"]
        case TreatmentKind.PAGE_TOC | TreatmentKind.PAGE_NAV:
            msg = f"Control directive cannot be rendered: {record.description}"
            raise ValueError(msg)


__all__ = [
    "Treatment",
    "TreatmentKind",
    "included_markers",
    "render_treatment",
]
