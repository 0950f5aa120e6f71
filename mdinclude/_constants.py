"""Common literal values used across mdinclude.

These constants keep directive patterns, generated-comment wording and
diagnostic labels centralized so the resolver, the generator and the tests can
import the same values without drifting. Intended for internal use within the
mdinclude package.

Examples
--------
>>> from mdinclude import _constants
>>> _constants.INCLUDED_BEGIN_TEMPLATE.format(treatment="pre", source="a.txt")
' >>>>>> BEGIN INCLUDED FILE (pre): SOURCE a.txt '
>>> bool(_constants.DIRECTIVE_PATTERN.match("@[:markdown](intro.md)"))
True
"""

import re

DIRECTIVE_PATTERN = re.compile(r"^@\[([^\[]+)\]\((.*?)\)$")
LINK_PATTERN = re.compile(r"\[([^\[]+)\]\(([^)]+)\)$")
TOC_TITLE_PATTERN = re.compile(r"^#{1,6}\s")

GENERATED_BEGIN_TEMPLATE = " >>>>>> BEGIN GENERATED FILE ({operation}): SOURCE {source} "
GENERATED_END_TEMPLATE = " <<<<<< END GENERATED FILE ({operation}): SOURCE {source} "
INCLUDED_BEGIN_TEMPLATE = " >>>>>> BEGIN INCLUDED FILE ({treatment}): SOURCE {source} "
INCLUDED_END_TEMPLATE = " <<<<<< END INCLUDED FILE ({treatment}): SOURCE {source} "

CIRCULAR_LABEL = "Includes are circular:"
UNREADABLE_INPUT_LABEL = "Could not read input file."
MISSING_INCLUDEE_LABEL = "Could not read include file,"
BACKTRACE_LABEL = "  Backtrace (innermost include first):"
LEVEL_LABEL = "    Level"

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

DOCUMENT_SUFFIXES = (".md", ".markdown")
DEFAULT_OPTIONS_FILE = ".mdinclude.yaml"


def comment(text: str) -> str:
    """Wrap ``text`` in an HTML comment occupying one output line."""
    return f"<!--{text}-->\n"
