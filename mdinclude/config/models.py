"""Typed dataclasses describing mdinclude options."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(slots=True)
class IncludeOptions:
    """Options controlling how generated documents are annotated.

    Attributes
    ----------
    pristine : bool
        When ``True`` no BEGIN/END comments are written around generated or
        included content, and no project root is needed.
    project_root : Path or None
        Root used to shorten displayed paths; located via git when ``None``.
    """

    pristine: bool = False
    project_root: Path | None = None

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the option keys accepted by this dataclass."""
        return frozenset(field.name for field in dc.fields(cls))


__all__ = ["IncludeOptions"]
