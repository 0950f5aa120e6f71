"""Load and validate mdinclude options.

Options may come from keyword arguments, from a YAML file (``.mdinclude.yaml``
by default) or from the command line. Every source funnels through
:func:`build_options`, which rejects unknown keys with
:class:`~mdinclude.errors.InvalidOptionError` and returns an
:class:`IncludeOptions` dataclass.

Examples
--------
>>> from mdinclude.config import build_options
>>> build_options({"pristine": True}).pristine
True
"""

from .loader import build_options, load_options
from .models import IncludeOptions

__all__ = ["IncludeOptions", "build_options", "load_options"]
