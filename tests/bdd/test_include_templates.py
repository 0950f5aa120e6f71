"""Behaviour tests for expanding include directives.

These pytest-bdd scenarios drive ``MarkdownIncluder.include`` over small
template trees written to a temporary directory. The feature file
``include_templates.feature`` covers nested expansion, circular includes and
missing includees, checking the backtraces users see when generation fails.

Usage
-----
Run ``pytest tests/bdd/test_include_templates.py -v``. Scenario state is
shared through the ``scenario_state`` fixture; no git checkout is needed
because the project root is passed explicitly.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest
from pytest_bdd import given, scenarios, then, when

from mdinclude.errors import CircularIncludeError, UnreadableInputError
from mdinclude.generator import MarkdownIncluder

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "include_templates.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
    return path


@given("a template that includes a chapter which includes a code sample")
def given_nested_template(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a template, a chapter and a Python sample the chapter includes."""
    scenario_state["template"] = _write(
        tmp_path, "README.template.md", "# Book\n@[:markdown](chapters/one.md)\n"
    )
    _write(tmp_path, "chapters/one.md", "## Chapter one\n@[python](../src/hello.py)\n")
    _write(tmp_path, "src/hello.py", "print('hello')\n")


@given("templates that include each other in a cycle")
def given_cycle(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a template whose chapters include each other."""
    scenario_state["template"] = _write(
        tmp_path, "README.template.md", "# Book\n@[:markdown](a.md)\n"
    )
    _write(tmp_path, "a.md", "@[:markdown](b.md)\n")
    _write(tmp_path, "b.md", "text\n@[:markdown](a.md)\n")


@given("a template whose chapter includes a missing file")
def given_missing(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a template whose chapter cites a file that does not exist."""
    scenario_state["template"] = _write(
        tmp_path, "README.template.md", "@[:markdown](chapter.md)\n"
    )
    _write(tmp_path, "chapter.md", "## Chapter\n\n@[:markdown](appendix.md)\n")


@when("I expand the template")
def when_expand(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Expand the template into README.md."""
    template = typ.cast("Path", scenario_state["template"])
    output = tmp_path / "README.md"
    MarkdownIncluder(project_root=tmp_path).include(template, output)
    scenario_state["output"] = output.read_text(encoding="utf-8")


@when("I try to expand the template")
def when_try_expand(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Expand the template, capturing the include error it raises."""
    template = typ.cast("Path", scenario_state["template"])
    with pytest.raises((CircularIncludeError, UnreadableInputError)) as excinfo:
        MarkdownIncluder(project_root=tmp_path).include(template, tmp_path / "out.md")
    scenario_state["error"] = excinfo.value


@then("the output contains the chapter and the fenced code sample")
def then_nested_output(scenario_state: ScenarioState) -> None:
    """Verify both levels of inclusion landed in the output."""
    output = typ.cast("str", scenario_state["output"])
    assert "## Chapter one\n" in output
    assert "```hello.py```:\n```python\nprint('hello')\n```\n" in output
    assert (
        "<!-- >>>>>> BEGIN INCLUDED FILE (python): SOURCE src/hello.py -->" in output
    ), "expected the code sample to be bracketed with its project-relative path"


@then("a circular include error lists the chain innermost first")
def then_cycle_error(scenario_state: ScenarioState) -> None:
    """Verify the error type and the order of backtrace locations."""
    error = scenario_state["error"]
    assert isinstance(error, CircularIncludeError)
    locations = [
        line.strip() for line in str(error).splitlines() if "Location:" in line
    ]
    assert locations == [
        "Location: b.md:2",
        "Location: a.md:1",
        "Location: README.template.md:2",
    ]


@then("an unreadable input error names the chapter and the template")
def then_missing_error(scenario_state: ScenarioState) -> None:
    """Verify the missing-includee error carries the include chain."""
    error = scenario_state["error"]
    assert isinstance(error, UnreadableInputError)
    message = str(error)
    assert message.startswith("Could not read include file,")
    assert "Location: chapter.md:3" in message
    assert "Location: README.template.md:1" in message
    assert "File path: appendix.md" in message
