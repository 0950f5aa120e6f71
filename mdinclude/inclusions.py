"""Track active inclusions and format diagnostic backtraces.

An :class:`InclusionRecord` describes one directive occurrence and the file
it resolves to. The :class:`InclusionStack` holds the chain of markdown
inclusions currently being expanded, outermost first, and is threaded through
the whole recursive expansion of one document so a file that would be
included inside its own ancestry is detected wherever it occurs.

Example
-------
>>> from pathlib import Path
>>> from mdinclude.inclusions import InclusionRecord, InclusionStack
>>> record = InclusionRecord.from_directive(
...     "@[:markdown](part.md)", Path("/docs/index.md"), 3, "part.md", ":markdown"
... )
>>> str(record.includee_path)
'/docs/part.md'
>>> InclusionStack().depth
0
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import os
import typing as typ
from pathlib import Path

from ._constants import (
    BACKTRACE_LABEL,
    CIRCULAR_LABEL,
    LEVEL_LABEL,
    MISSING_INCLUDEE_LABEL,
)
from .errors import CircularIncludeError, UnreadableInputError
from .project import path_in_project

if typ.TYPE_CHECKING:
    import collections.abc as cabc

BACKTRACE_INDENT_LEVEL = 3


@dc.dataclass(frozen=True, slots=True)
class InclusionRecord:
    """One directive occurrence and its resolved target.

    Attributes
    ----------
    description : str
        The raw directive text, without its line ending.
    includer_path : Path
        Document containing the directive.
    line_number : int
        1-based line of the directive within the includer.
    cited_path : str
        Target path exactly as written in the directive.
    treatment : str
        Treatment token as written, e.g. ``":markdown"`` or ``"python"``.
    includee_path : Path
        Absolute target path, resolved against the includer's directory.
    page_toc_title : str or None
        Heading line used as the TOC title (``:page_toc`` only).
    page_toc_line : str or None
        Literal placeholder line (``:page_toc`` only).
    """

    description: str
    includer_path: Path
    line_number: int
    cited_path: str
    treatment: str
    includee_path: Path
    page_toc_title: str | None = None
    page_toc_line: str | None = None

    @classmethod
    def from_directive(
        cls,
        description: str,
        includer_path: Path,
        line_number: int,
        cited_path: str,
        treatment: str,
    ) -> InclusionRecord:
        """Build a record, resolving ``cited_path`` next to the includer."""
        joined = os.path.join(os.path.dirname(includer_path), cited_path)
        return cls(
            description=description,
            includer_path=includer_path,
            line_number=line_number,
            cited_path=cited_path,
            treatment=treatment,
            includee_path=Path(os.path.abspath(joined)),
        )

    @property
    def real_includee_path(self) -> Path | None:
        """Return the canonical target path, or ``None`` if it does not exist."""
        if not self.includee_path.exists():
            return None
        return self.includee_path.resolve()

    def to_lines(self, root: Path | None, indentation_level: int) -> list[str]:
        """Describe the includer location and includee for a backtrace."""
        outer = "  " * indentation_level
        inner = "  " * (indentation_level + 1)
        includer = path_in_project(self.includer_path, root)
        includee = path_in_project(self.includee_path, root)
        return [
            f"{outer}Includer:",
            f"{inner}Location: {includer}:{self.line_number}",
            f"{inner}Include description: {self.description}",
            f"{outer}Includee:",
            f"{inner}File path: {includee}",
        ]


@dc.dataclass(slots=True)
class InclusionStack:
    """Chain of markdown inclusions being expanded, outermost first."""

    root: Path | None = None
    records: list[InclusionRecord] = dc.field(default_factory=list)

    @property
    def depth(self) -> int:
        """Return the number of active markdown inclusions."""
        return len(self.records)

    @contextlib.contextmanager
    def including(self, record: InclusionRecord) -> cabc.Iterator[None]:
        """Push ``record`` for the duration of the block."""
        self.records.append(record)
        try:
            yield
        finally:
            self.records.pop()

    def check_circularity(self, record: InclusionRecord) -> None:
        """Raise if ``record`` resolves to a file already on the stack.

        Raises
        ------
        CircularIncludeError
            With a backtrace whose level 0 is ``record`` itself.
        """
        real_path = record.real_includee_path
        if real_path is None:
            return
        if any(active.real_includee_path == real_path for active in self.records):
            message = "\n".join([CIRCULAR_LABEL, self.backtrace(record)])
            raise CircularIncludeError(message)

    def unreadable(self, record: InclusionRecord) -> UnreadableInputError:
        """Return the error reported when ``record``'s target cannot be read."""
        message = "\n".join([MISSING_INCLUDEE_LABEL, self.backtrace(record)])
        return UnreadableInputError(message)

    def backtrace(self, failing: InclusionRecord | None = None) -> str:
        """Format the active chain, innermost first, ending with ``failing``."""
        chain = [*self.records]
        if failing is not None:
            chain.append(failing)
        lines = [BACKTRACE_LABEL]
        for level, record in enumerate(reversed(chain)):
            lines.append(f"{LEVEL_LABEL} {level}:")
            lines.extend(record.to_lines(self.root, BACKTRACE_INDENT_LEVEL))
        return "\n".join(lines)


__all__ = ["InclusionRecord", "InclusionStack"]
