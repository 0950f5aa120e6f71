"""Load mdinclude options from YAML or keyword arguments."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from mdinclude.errors import InvalidOptionError

from .models import IncludeOptions


def build_options(
    payload: typ.Mapping[str, typ.Any] | None = None,
    *,
    base: IncludeOptions | None = None,
) -> IncludeOptions:
    """Merge ``payload`` over ``base`` and return validated options.

    Parameters
    ----------
    payload : Mapping[str, Any], optional
        Option values keyed by option name.
    base : IncludeOptions, optional
        Options supplying values for keys absent from ``payload``.

    Returns
    -------
    IncludeOptions
        A new options instance; ``base`` is not modified.

    Raises
    ------
    InvalidOptionError
        If ``payload`` contains an unknown key or a value of the wrong type.
    """
    options = base or IncludeOptions()
    merged = IncludeOptions(
        pristine=options.pristine, project_root=options.project_root
    )
    if not payload:
        return merged

    known = IncludeOptions.field_names()
    for key, value in payload.items():
        if key not in known:
            msg = f"Unknown option: {key}"
            raise InvalidOptionError(msg)
        match key:
            case "pristine":
                if not isinstance(value, bool):
                    msg = f"Option 'pristine' must be a boolean, not {value!r}"
                    raise InvalidOptionError(msg)
                merged.pristine = value
            case "project_root":
                merged.project_root = _coerce_root(value)
    return merged


def _coerce_root(value: object) -> Path | None:
    """Return ``value`` as an absolute Path, or None when empty."""
    match value:
        case None:
            return None
        case Path():
            return value.absolute()
        case str() as text if text.strip():
            return Path(text.strip()).absolute()
        case str():
            return None
        case _:
            msg = f"Option 'project_root' must be a path, not {value!r}"
            raise InvalidOptionError(msg)


def load_options(path: Path, *, base: IncludeOptions | None = None) -> IncludeOptions:
    """Load options from the YAML mapping stored at ``path``.

    Parameters
    ----------
    path : Path
        YAML file such as ``.mdinclude.yaml``.
    base : IncludeOptions, optional
        Options to merge the file's values over.

    Returns
    -------
    IncludeOptions
        Options merged from ``base`` and the file.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    InvalidOptionError
        If the document is not a mapping or names an unknown option.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdinclude.config import load_options
    >>> load_options(Path(".mdinclude.yaml")).pristine  # doctest: +SKIP
    False
    """
    if not path.exists():
        msg = f"Options file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Options file '{path}' must contain a mapping."
        raise InvalidOptionError(msg)
    return build_options(loaded, base=base)


__all__ = ["build_options", "load_options"]
