"""Shared fixtures for mdinclude tests."""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from mdinclude.resolver import IncludeResolver

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

WriteFile = typ.Callable[[str, str], "Path"]


@pytest.fixture
def write_file(tmp_path: Path) -> WriteFile:
    """Return a helper that writes dedented text below ``tmp_path``."""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def resolver(tmp_path: Path) -> IncludeResolver:
    """Return a resolver that annotates includes relative to ``tmp_path``."""
    return IncludeResolver(project_root=tmp_path)


@pytest.fixture
def pristine_resolver() -> IncludeResolver:
    """Return a resolver that emits no generated comments."""
    return IncludeResolver(pristine=True)


@pytest.fixture
def resolve_file() -> cabc.Callable[[IncludeResolver, Path], list[str]]:
    """Return a helper that resolves the directives of a file on disk."""

    def _resolve(resolver: IncludeResolver, path: Path) -> list[str]:
        lines = path.read_text(encoding="utf-8").splitlines(keepends=True)
        return resolver.resolve(lines, path)

    return _resolve
