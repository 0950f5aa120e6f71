"""Expand include directives in Markdown templates.

This package resolves ``@[treatment](path)`` directives recursively, builds
page tables of contents from headings, and writes prev/next navigation tables
across a sequence of pages. It backs the ``mdinclude`` console script.

Exports
-------
- ``MarkdownIncluder``: read a template and write the generated file.
- ``IncludeResolver``: expand the directives of in-memory lines.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdinclude import IncludeResolver
>>> from pathlib import Path
>>> IncludeResolver(pristine=True).resolve(["plain\\n"], Path("doc.md"))
['plain\\n']
"""

from __future__ import annotations

from .cli import app, main
from .generator import MarkdownIncluder
from .resolver import IncludeResolver

__all__ = ["IncludeResolver", "MarkdownIncluder", "app", "main"]
