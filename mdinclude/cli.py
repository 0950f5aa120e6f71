"""Cyclopts CLI entrypoint for expanding Markdown include directives.

The ``mdinclude`` console script defined here renders a template containing
``@[treatment](path)`` directives into a finished Markdown file, and keeps the
deprecated ``create-page-toc`` command for older build scripts. Options can be
stored in ``.mdinclude.yaml`` and every flag can also be supplied through an
``INPUT_``-prefixed environment variable, which suits CI workflows.

Examples
--------
Expand a README template in the current git checkout:

>>> from mdinclude.cli import app
>>> app(["include", "README.template.md", "README.md"])  # doctest: +SKIP

Produce output without the generated BEGIN/END comments:

>>> app(
...     ["include", "README.template.md", "README.md", "--pristine"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_OPTIONS_FILE
from .config import IncludeOptions, build_options, load_options
from .errors import MarkdownIncludeError
from .generator import MarkdownIncluder

DEFAULT_CONFIG = Path(DEFAULT_OPTIONS_FILE)

app = App(name="mdinclude", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_options(
    config: Path, pristine: bool | None, project_root: Path | None
) -> IncludeOptions:
    """Combine the options file (when present) with command-line overrides."""
    options = load_options(config) if config.exists() else IncludeOptions()
    overrides: dict[str, typ.Any] = {}
    if pristine is not None:
        overrides["pristine"] = pristine
    if project_root is not None:
        overrides["project_root"] = project_root
    return build_options(overrides, base=options)


@app.command(help="Expand include directives in a template into a Markdown file.")
def include(
    template: typ.Annotated[Path, Parameter(help="Template to expand")],
    output: typ.Annotated[Path, Parameter(help="Markdown file to write")],
    *,
    pristine: typ.Annotated[
        bool | None,
        Parameter(help="Omit generated BEGIN/END comments", env_var="INPUT_PRISTINE"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to options file", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    project_root: typ.Annotated[
        Path | None,
        Parameter(
            help="Root for displayed paths (defaults to the git top level)",
            env_var="INPUT_PROJECT_ROOT",
        ),
    ] = None,
) -> None:
    """Expand ``template`` into ``output``.

    Parameters
    ----------
    template : Path
        Markdown template containing ``@[treatment](path)`` directives.
    output : Path
        Destination Markdown file; overwritten if it exists.
    pristine : bool or None, optional
        Suppress generated comments; ``None`` defers to the options file.
    config : Path, optional
        Options file, read only when it exists.
    project_root : Path or None, optional
        Root used for displayed paths; located via git when omitted.

    Returns
    -------
    None
        Writes ``output`` and prints its path.
    """
    options = _resolve_options(config, pristine, project_root)
    written = MarkdownIncluder(options).include(template, output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Deprecated: write the table of contents of a Markdown file.")
def create_page_toc(
    markdown: typ.Annotated[Path, Parameter(help="Markdown file to scan")],
    output: typ.Annotated[Path, Parameter(help="TOC file to write")],
    *,
    pristine: typ.Annotated[
        bool | None,
        Parameter(help="Omit generated BEGIN/END comments", env_var="INPUT_PRISTINE"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to options file", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    project_root: typ.Annotated[
        Path | None,
        Parameter(
            help="Root for displayed paths (defaults to the git top level)",
            env_var="INPUT_PROJECT_ROOT",
        ),
    ] = None,
) -> None:
    """Write the TOC of ``markdown`` into ``output``; prefer ``:page_toc``."""
    options = _resolve_options(config, pristine, project_root)
    written = MarkdownIncluder(options).create_page_toc(markdown, output)
    print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``mdinclude`` command.

    Include failures are reported on stderr, backtrace included, and the
    process exits with status 1.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    try:
        app()
    except MarkdownIncludeError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
