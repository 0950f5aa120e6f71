"""High-level operations that read a template and write a generated file.

:class:`MarkdownIncluder` is the public entry point. ``include`` expands every
directive of a template into an output Markdown file; the deprecated
``create_page_toc`` writes only the table of contents of a Markdown file.
Unless running pristine, each generated file is bracketed by BEGIN/END
comments naming the operation and the template, relative to the project root.

Example
-------
>>> from pathlib import Path
>>> from mdinclude.generator import MarkdownIncluder
>>> includer = MarkdownIncluder(pristine=True)
>>> includer.include(Path("README.template.md"), Path("README.md"))  # doctest: +SKIP
PosixPath('README.md')
"""

from __future__ import annotations

import logging
import typing as typ
import warnings
from pathlib import Path

from ._constants import (
    GENERATED_BEGIN_TEMPLATE,
    GENERATED_END_TEMPLATE,
    TEXT_ENCODING,
    TEXT_ERRORS,
    UNREADABLE_INPUT_LABEL,
    comment,
)
from .config import IncludeOptions, build_options
from .errors import UnreadableInputError
from .markdown_parser import build_toc_lines
from .project import locate_project_root, path_in_project
from .resolver import IncludeResolver

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

CREATE_PAGE_TOC_DEPRECATION = (
    "Method create_page_toc is deprecated.\n"
    "Please use method include with embedded :page_toc treatment."
)


class MarkdownIncluder:
    """Generate Markdown files from templates containing include directives."""

    def __init__(
        self,
        options: IncludeOptions | None = None,
        **overrides: object,
    ) -> None:
        """Initialize the includer.

        Parameters
        ----------
        options : IncludeOptions, optional
            Base options, for example loaded from ``.mdinclude.yaml``.
        **overrides : object
            Individual option values (``pristine``, ``project_root``) applied
            over ``options``.

        Raises
        ------
        InvalidOptionError
            If an override names an unknown option or has the wrong type.
        ProjectRootError
            If no project root is configured, the includer is not pristine,
            and the working directory is not inside a git checkout.
        """
        self.options = build_options(overrides, base=options)
        if self.options.project_root is None and not self.options.pristine:
            self.options.project_root = locate_project_root()

    @property
    def pristine(self) -> bool:
        """Return True when generated comments are suppressed."""
        return self.options.pristine

    @property
    def project_root(self) -> Path | None:
        """Return the root that displayed paths are relative to."""
        return self.options.project_root

    def include(self, template_path: Path, markdown_path: Path) -> Path:
        """Expand the directives of ``template_path`` into ``markdown_path``.

        Parameters
        ----------
        template_path : Path
            Template containing ``@[treatment](path)`` directives.
        markdown_path : Path
            Destination file; overwritten if it exists.

        Returns
        -------
        Path
            ``markdown_path``, once written.

        Raises
        ------
        UnreadableInputError
            If the template or any includee cannot be read.
        CircularIncludeError
            If the templates include each other circularly.
        """
        resolver = IncludeResolver(
            pristine=self.pristine, project_root=self.project_root
        )

        def _expand(lines: list[str]) -> list[str]:
            return resolver.resolve(lines, template_path)

        return self._generate_file(template_path, markdown_path, "include", _expand)

    def create_page_toc(self, markdown_path: Path, toc_path: Path) -> Path:
        """Write the table of contents of ``markdown_path`` into ``toc_path``.

        Deprecated: embed ``@[:page_toc](## Contents)`` in a template and call
        :meth:`include` instead.
        """
        warnings.warn(CREATE_PAGE_TOC_DEPRECATION, FutureWarning, stacklevel=2)
        return self._generate_file(
            markdown_path, toc_path, "create_page_toc", build_toc_lines
        )

    def _generate_file(
        self,
        template_path: Path,
        output_path: Path,
        operation: str,
        transform: cabc.Callable[[list[str]], list[str]],
    ) -> Path:
        """Read the template, transform its lines, and write the output file."""
        try:
            with Path(template_path).open(
                "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS
            ) as handle:
                input_lines = handle.readlines()
        except OSError as exc:
            message = "\n".join([UNREADABLE_INPUT_LABEL, repr(str(template_path))])
            raise UnreadableInputError(message) from exc

        source = path_in_project(Path(template_path).absolute(), self.project_root)
        output_lines = transform(input_lines)
        if not self.pristine:
            begin = GENERATED_BEGIN_TEMPLATE.format(operation=operation, source=source)
            end = GENERATED_END_TEMPLATE.format(operation=operation, source=source)
            output_lines = [comment(begin), *output_lines, comment(end)]

        output = Path(output_path)
        output.write_text(
            "".join(output_lines), encoding=TEXT_ENCODING, errors=TEXT_ERRORS
        )
        logger.debug("wrote %s (%s) from %s", output, operation, source)
        return output


__all__ = ["MarkdownIncluder"]
