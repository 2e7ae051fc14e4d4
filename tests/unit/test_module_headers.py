"""Every lexi module opens with its path comment."""

from pathlib import Path

import pytest

import lexi

MODULES = sorted(p for p in Path(lexi.__file__).parent.glob("*.py") if p.name != "__init__.py")


@pytest.mark.parametrize("path", MODULES, ids=lambda p: p.name)
def test_module_starts_with_path_comment(path):
    first_line = path.read_text(encoding="utf-8").splitlines()[0]
    assert first_line == f"# lexi/{path.name}"
