"""Exceptions raised while expanding Markdown include directives."""

from __future__ import annotations


class MarkdownIncludeError(RuntimeError):
    """Base exception for mdinclude operations."""


class CircularIncludeError(MarkdownIncludeError):
    """A markdown file would be included within its own include chain."""


class UnreadableInputError(MarkdownIncludeError):
    """The template, or an includee cited by a directive, cannot be read."""


class InvalidTocTitleError(MarkdownIncludeError):
    """The ``:page_toc`` argument is not a Markdown heading line."""


class MisplacedPageTocError(MarkdownIncludeError):
    """A ``:page_toc`` directive appeared outside the outermost document."""


class MultiplePageTocError(MarkdownIncludeError):
    """More than one ``:page_toc`` directive appeared in a document."""


class InvalidNavPatternError(MarkdownIncludeError):
    """The ``:page_nav`` argument is not a valid regular expression."""


class InvalidOptionError(MarkdownIncludeError, ValueError):
    """An unknown or malformed option was supplied."""


class ProjectRootError(MarkdownIncludeError):
    """The project root could not be located."""


__all__ = [
    "CircularIncludeError",
    "InvalidNavPatternError",
    "InvalidOptionError",
    "InvalidTocTitleError",
    "MarkdownIncludeError",
    "MisplacedPageTocError",
    "MultiplePageTocError",
    "ProjectRootError",
    "UnreadableInputError",
]
