"""Expand include directives recursively, detecting circular inclusion.

:class:`IncludeResolver` scans a document line by line. A line consisting
solely of ``@[treatment](path)`` is a directive; everything else passes
through untouched. Markdown inclusions are expanded depth-first as soon as
they are met, so the page TOC and page navigation passes see the nested
content. Leaf treatments (code blocks, comments, ``<pre>`` blocks) are held
back and rendered after those passes, which keeps headings and links inside
included source files out of the TOC and the navigation sequence.

Example
-------
>>> from pathlib import Path
>>> from mdinclude.resolver import IncludeResolver
>>> resolver = IncludeResolver(pristine=True)
>>> resolver.resolve(["# Title\n", "Body\n"], Path("doc.md"))
['# Title\n', 'Body\n']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ
import warnings
from pathlib import Path

from ._constants import (
    DIRECTIVE_PATTERN,
    TEXT_ENCODING,
    TEXT_ERRORS,
    TOC_TITLE_PATTERN,
)
from .errors import (
    InvalidNavPatternError,
    InvalidTocTitleError,
    MisplacedPageTocError,
    MultiplePageTocError,
)
from .inclusions import InclusionRecord, InclusionStack
from .markdown_parser import build_toc_lines
from .page_nav import PageNavGenerator
from .project import path_in_project
from .treatments import (
    DEPRECATED_TOKENS,
    Treatment,
    TreatmentKind,
    included_markers,
    render_treatment,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class _PendingInclusion:
    """A leaf directive awaiting rendering after the post-passes."""

    record: InclusionRecord
    treatment: Treatment


_Assembled = list[str | _PendingInclusion]


class IncludeResolver:
    """Expand the include directives of one document and its includees."""

    def __init__(
        self,
        *,
        pristine: bool = False,
        project_root: Path | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the resolver.

        Parameters
        ----------
        pristine : bool, optional
            Omit the BEGIN/END comments around included content.
        project_root : Path, optional
            Root that displayed paths are made relative to; absolute paths are
            shown when ``None``.
        templates_dir : Path, optional
            Override for the directory holding the navigation table template.
        """
        self.pristine = pristine
        self.project_root = project_root
        self.templates_dir = templates_dir

    def resolve(self, lines: cabc.Iterable[str], path: Path) -> list[str]:
        """Return ``lines`` with every directive expanded.

        Parameters
        ----------
        lines : Iterable[str]
            Lines of the outermost document, with line endings.
        path : Path
            Location of that document; relative include paths are resolved
            against its directory.

        Returns
        -------
        list[str]
            The fully expanded document.

        Raises
        ------
        CircularIncludeError
            If a markdown file would be included within its own include chain.
        UnreadableInputError
            If an includee, or a page named by ``:page_nav``, cannot be read.
        InvalidTocTitleError, MisplacedPageTocError, MultiplePageTocError
            If a ``:page_toc`` directive is malformed or misplaced.
        InvalidNavPatternError
            If a ``:page_nav`` argument is not a valid regular expression.
        """
        stack = InclusionStack(root=self.project_root)
        return self._include_files(Path(path).absolute(), list(lines), stack)

    def _include_files(
        self, includer_path: Path, input_lines: list[str], stack: InclusionStack
    ) -> list[str]:
        assembled: _Assembled = []
        page_toc: InclusionRecord | None = None
        page_toc_index = 0
        page_nav: re.Pattern[str] | None = None

        for line_number, line in enumerate(input_lines, start=1):
            text = line.rstrip("\r\n")
            directive = DIRECTIVE_PATTERN.match(text)
            if directive is None:
                assembled.append(line)
                continue
            token, cited_path = directive.groups()
            record = InclusionRecord.from_directive(
                text, includer_path, line_number, cited_path, token
            )
            treatment = Treatment.parse(token)
            match treatment.kind:
                case TreatmentKind.MARKDOWN:
                    assembled.extend(self._include_markdown(record, treatment, stack))
                case TreatmentKind.PAGE_TOC:
                    page_toc = self._page_toc_record(record, line, page_toc, stack)
                    page_toc_index = len(assembled)
                    assembled.append(line)
                case TreatmentKind.PAGE_NAV:
                    page_nav = self._page_nav_pattern(record)
                case _:
                    assembled.append(_PendingInclusion(record, treatment))

        if page_toc is not None:
            self._insert_page_toc(assembled, page_toc, page_toc_index)
        if page_nav is not None:
            navigator = PageNavGenerator(
                page_nav, includer_path.parent, templates_dir=self.templates_dir
            )
            navigator.run(item for item in assembled if isinstance(item, str))

        output: list[str] = []
        for item in assembled:
            if isinstance(item, str):
                output.append(item)
            else:
                output.extend(self._include_leaf(item, stack))
        return output

    def _include_markdown(
        self, record: InclusionRecord, treatment: Treatment, stack: InclusionStack
    ) -> list[str]:
        """Expand a markdown includee, recursing into its own directives."""
        if treatment.deprecated_token:
            replacement = DEPRECATED_TOKENS[treatment.deprecated_token]
            location = path_in_project(record.includer_path, self.project_root)
            message = (
                f"{location}:{record.line_number}: "
                f"Treatment '{treatment.deprecated_token}' is deprecated; "
                f"please use treatment '{replacement}'."
            )
            warnings.warn(message, FutureWarning, stacklevel=2)
        stack.check_circularity(record)
        include_lines = self._read_includee(record, stack)
        with stack.including(record):
            body = self._include_files(record.includee_path, include_lines, stack)
        rendered = render_treatment(treatment, record, body)
        return self._bracket(treatment, record, rendered)

    def _include_leaf(
        self, pending: _PendingInclusion, stack: InclusionStack
    ) -> list[str]:
        """Render a non-recursive inclusion such as a code block."""
        include_lines = self._read_includee(pending.record, stack)
        rendered = render_treatment(pending.treatment, pending.record, include_lines)
        return self._bracket(pending.treatment, pending.record, rendered)

    def _read_includee(
        self, record: InclusionRecord, stack: InclusionStack
    ) -> list[str]:
        """Return the includee's lines, warning when the last one is unterminated."""
        logger.debug(
            "including %s from %s:%d",
            record.includee_path,
            record.includer_path,
            record.line_number,
        )
        try:
            with record.includee_path.open(
                "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS
            ) as handle:
                lines = handle.readlines()
        except OSError as exc:
            raise stack.unreadable(record) from exc
        if not lines or not lines[-1].endswith("\n"):
            logger.warning(
                "Included file has no trailing newline: %s", record.cited_path
            )
        return lines

    def _bracket(
        self, treatment: Treatment, record: InclusionRecord, rendered: list[str]
    ) -> list[str]:
        if self.pristine:
            return rendered
        source = path_in_project(record.includee_path, self.project_root)
        begin, end = included_markers(treatment, source)
        return [begin, *rendered, end]

    @staticmethod
    def _page_toc_record(
        record: InclusionRecord,
        line: str,
        existing: InclusionRecord | None,
        stack: InclusionStack,
    ) -> InclusionRecord:
        """Validate a ``:page_toc`` directive and attach its title and placeholder."""
        if stack.depth != 0:
            msg = "Page TOC must be in outermost markdown file."
            raise MisplacedPageTocError(msg)
        if existing is not None:
            msg = "Only one page TOC allowed."
            raise MultiplePageTocError(msg)
        title = record.cited_path
        if not TOC_TITLE_PATTERN.match(title):
            msg = f"TOC title must be a valid markdown header, not {title}"
            raise InvalidTocTitleError(msg)
        return dc.replace(record, page_toc_title=title, page_toc_line=line)

    def _page_nav_pattern(self, record: InclusionRecord) -> re.Pattern[str]:
        """Compile the expression of a ``:page_nav`` directive."""
        try:
            return re.compile(record.cited_path)
        except re.error as exc:
            location = path_in_project(record.includer_path, self.project_root)
            msg = (
                f"Invalid page navigation pattern at {location}:"
                f"{record.line_number}: {record.description} ({exc})"
            )
            raise InvalidNavPatternError(msg) from exc

    @staticmethod
    def _insert_page_toc(
        assembled: _Assembled, page_toc: InclusionRecord, index: int
    ) -> None:
        """Replace the placeholder at ``index`` with the TOC title and entries."""
        following = [item for item in assembled[index + 1 :] if isinstance(item, str)]
        toc_lines = [f"{page_toc.page_toc_title}\n", *build_toc_lines(following)]
        assembled[index : index + 1] = toc_lines


__all__ = ["IncludeResolver"]
