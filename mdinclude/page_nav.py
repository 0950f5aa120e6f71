"""Insert prev/next navigation tables into a sequence of Markdown pages.

The ``:page_nav`` directive names a regular expression. After a document has
been assembled, every line matching that expression and ending in a Markdown
link designates one page of a sequence, in document order. Each linked
Markdown page is then rewritten in place with an HTML table pointing at its
neighbours, once above and once below the existing content.

GitHub-flavoured Markdown is picky about whitespace inside HTML tables, so the
table markup comes from the ``page_nav.jinja`` template with block trimming
enabled.

Example
-------
>>> from mdinclude.page_nav import relative_page_path
>>> relative_page_path("pages/one.md", "pages/two.md")
'../two.md'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import posixpath
import re
import typing as typ
from pathlib import Path
from urllib.parse import urlsplit

from jinja2 import Environment, FileSystemLoader

from ._constants import (
    DOCUMENT_SUFFIXES,
    LINK_PATTERN,
    TEXT_ENCODING,
    TEXT_ERRORS,
    UNREADABLE_INPUT_LABEL,
)
from .errors import UnreadableInputError
from .markdown_parser import first_heading_title

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

_NAV_TABLE = (
    r"<table>\n"
    r"(?:  <tr>\n"
    r"    <th>(?:Prev|Next)</th>\n"
    r"    <td><a href=\"[^\"\n]*\">[^\n]*</a></td>\n"
    r"  </tr>\n)+"
    r"</table>\n"
)
LEADING_NAV_PATTERN = re.compile(r"\A" + _NAV_TABLE + r"\n")
TRAILING_NAV_PATTERN = re.compile(r"\n" + _NAV_TABLE + r"\Z")


@dc.dataclass(slots=True)
class PageInfo:
    """One page of a navigated sequence and its neighbours.

    Attributes
    ----------
    path : str
        Page path as written in the link.
    file_path : Path
        Location of the page on disk.
    title : str or None
        Title of the page's first heading; ``None`` for non-Markdown pages.
    prev_path, prev_title, next_path, next_title : str or None
        Linked path and title of the neighbouring pages, when present.
    """

    path: str
    file_path: Path
    title: str | None = None
    prev_path: str | None = None
    prev_title: str | None = None
    next_path: str | None = None
    next_title: str | None = None

    @property
    def is_document(self) -> bool:
        """Return True when the page is a Markdown file that can be rewritten."""
        return self.path.endswith(DOCUMENT_SUFFIXES)


@dc.dataclass(frozen=True, slots=True)
class NavRow:
    """A single ``Prev`` or ``Next`` row of a navigation table."""

    label: str
    href: str
    title: str


def common_directory(path_a: str, path_b: str) -> str:
    """Return the longest directory prefix shared by two slash-separated paths."""
    prefix = os.path.commonprefix([path_a, path_b])
    directory, _, _ = prefix.rpartition("/")
    return directory


def relative_page_path(from_path: str, to_path: str) -> str:
    """Return ``to_path`` with the directory it shares with ``from_path`` as ``..``."""
    directory = common_directory(from_path, to_path)
    if not directory:
        return posixpath.join("..", to_path)
    return ".." + to_path[len(directory) :]


class PageNavGenerator:
    """Collect linked pages from a document and write navigation tables."""

    def __init__(
        self,
        pattern: re.Pattern[str] | str,
        base_dir: Path,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        pattern : Pattern or str
            Expression selecting the lines that link to navigated pages.
        base_dir : Path
            Directory that relative page links are resolved against.
        templates_dir : Path, optional
            Directory containing ``page_nav.jinja``; defaults to the package
            templates.
        """
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.base_dir = base_dir
        default_templates = Path(__file__).resolve().parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or default_templates)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template("page_nav.jinja")

    def run(self, lines: cabc.Iterable[str]) -> list[Path]:
        """Write navigation tables into every Markdown page linked from ``lines``.

        Returns
        -------
        list[Path]
            Pages that were rewritten, in sequence order. A page left without
            neighbours only has navigation tables from an earlier run removed.

        Raises
        ------
        UnreadableInputError
            If a linked Markdown page cannot be read.
        """
        pages = self.collect_pages(lines)
        written: list[Path] = []
        for page in pages:
            if not page.is_document:
                continue
            if self._write_page(page, self.render_table(page)):
                written.append(page.file_path)
        return written

    def collect_pages(self, lines: cabc.Iterable[str]) -> list[PageInfo]:
        """Return linked pages in document order with neighbours filled in."""
        pages: list[PageInfo] = []
        for line in lines:
            text = line.rstrip("\r\n")
            if not self.pattern.search(text):
                continue
            match = LINK_PATTERN.search(text)
            if match is None:
                continue
            pages.append(self._page_info(match.group(2)))

        for index, page in enumerate(pages):
            if index > 0:
                previous = pages[index - 1]
                page.prev_path = previous.path
                page.prev_title = previous.title
            if index < len(pages) - 1:
                following = pages[index + 1]
                page.next_path = following.path
                page.next_title = following.title
        return pages

    def render_table(self, page: PageInfo) -> str | None:
        """Return the HTML table for ``page``, or None if it has no neighbours."""
        rows: list[NavRow] = []
        if page.prev_path:
            href = relative_page_path(page.path, page.prev_path)
            rows.append(NavRow("Prev", href, page.prev_title or ""))
        if page.next_path:
            href = relative_page_path(page.path, page.next_path)
            rows.append(NavRow("Next", href, page.next_title or ""))
        if not rows:
            return None
        return self.template.render(rows=rows)

    def _page_info(self, url: str) -> PageInfo:
        """Build a PageInfo for a link target, reading its title if Markdown."""
        path = urlsplit(url).path
        file_path = self.base_dir / path
        page = PageInfo(path=path, file_path=file_path)
        if page.is_document:
            page.title = first_heading_title(self._read_lines(file_path))
        return page

    @staticmethod
    def _read_lines(file_path: Path) -> list[str]:
        try:
            with file_path.open(
                "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS
            ) as handle:
                return handle.readlines()
        except OSError as exc:
            message = "\n".join([UNREADABLE_INPUT_LABEL, repr(str(file_path))])
            raise UnreadableInputError(message) from exc

    def _write_page(self, page: PageInfo, table: str | None) -> bool:
        """Replace existing navigation tables with ``table``.

        Returns False, leaving the file untouched, when there is no table to
        insert and none to remove.
        """
        original = "".join(self._read_lines(page.file_path))
        content = LEADING_NAV_PATTERN.sub("", original, count=1)
        content = TRAILING_NAV_PATTERN.sub("", content, count=1)
        if table is not None:
            content = f"{table}\n{content}\n{table}"
        elif content == original:
            return False
        page.file_path.write_text(content, encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
        logger.debug("wrote page navigation into %s", page.file_path)
        return True


__all__ = [
    "NavRow",
    "PageInfo",
    "PageNavGenerator",
    "common_directory",
    "relative_page_path",
]
