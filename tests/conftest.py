"""Shared fixtures for code-import tests."""

from pathlib import Path

import pytest

SAY_HI = "Hello\nline2\nline3\nline4\n"

INDENTED = "function indentation() {\n  console.log('indentation');\n\treturn 'indentation';\n}\n"

NESTED = "    def run(self):\n        return 1\n\n    def stop(self):\n        return 0\n"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with a small set of source files to import from."""
    root = tmp_path / "project"
    fixtures = root / "__fixtures__"
    fixtures.mkdir(parents=True)

    (fixtures / "say-#-hi.js").write_text(SAY_HI, encoding="utf-8")
    (fixtures / "indentation.js").write_text(INDENTED, encoding="utf-8")
    (fixtures / "nested.py").write_text(NESTED, encoding="utf-8")
    (fixtures / "my file.js").write_text("spaced\n", encoding="utf-8")

    (root / "docs").mkdir()
    (tmp_path / "secret.txt").write_text("outside\n", encoding="utf-8")
    return root


@pytest.fixture
def isolated_cli(project: Path, tmp_path: Path, monkeypatch) -> Path:
    """Run CLI commands from the project root with private settings files."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("CODE_IMPORT_LOG_PATH", raising=False)
    monkeypatch.delenv("CODE_IMPORT_LOG_LEVEL", raising=False)
    monkeypatch.chdir(project)
    return project
