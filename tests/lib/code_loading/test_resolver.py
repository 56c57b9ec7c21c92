"""Tests for reference target resolution and root containment."""

from pathlib import Path

import pytest
from code_import_cli.errors import ConfigurationError
from code_import_cli.errors import OutsideRootError
from code_import_cli.lib.code_loading.resolver import PathResolver


@pytest.fixture
def root(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    (root / "guide").mkdir(parents=True)
    return root


def test_relative_to_document_directory(root):
    resolver = PathResolver(root)
    assert resolver.resolve("./a.js", root / "guide") == root / "guide" / "a.js"
    assert resolver.resolve("a.js", root / "guide") == root / "guide" / "a.js"


def test_parent_traversal_inside_root(root):
    resolver = PathResolver(root)
    assert resolver.resolve("../a.js", root / "guide") == root / "a.js"


def test_root_itself_is_inside(root):
    assert PathResolver(root).resolve(".", root) == root


def test_outside_root_rejected(root):
    resolver = PathResolver(root)
    with pytest.raises(OutsideRootError) as exc_info:
        resolver.resolve("../../secret.txt", root / "guide")

    error = exc_info.value
    assert error.path == root.parent / "secret.txt"
    assert error.root_dir == root
    assert str(root) in str(error)
    assert str(root.parent / "secret.txt") in str(error)


def test_parent_of_root_rejected(root):
    with pytest.raises(OutsideRootError):
        PathResolver(root).resolve("..", root)


def test_sibling_with_common_prefix_rejected(root):
    with pytest.raises(OutsideRootError):
        PathResolver(root).resolve("../docs-old/a.js", root)


def test_absolute_target(root):
    resolver = PathResolver(root)
    assert resolver.resolve(str(root / "a.js"), root / "guide") == root / "a.js"
    with pytest.raises(OutsideRootError):
        resolver.resolve("/etc/passwd", root / "guide")


def test_allow_outside(root):
    resolver = PathResolver(root, allow_outside=True)
    assert resolver.resolve("../../secret.txt", root / "guide") == root.parent / "secret.txt"


def test_root_dir_token(root):
    resolver = PathResolver(root)
    assert resolver.resolve("<rootDir>/src/a.js", root / "guide") == root / "src" / "a.js"


def test_root_dir_token_only_at_start(root):
    resolver = PathResolver(root)
    assert resolver.resolve("x/<rootDir>/a.js", root) == root / "x" / "<rootDir>" / "a.js"


def test_escaped_spaces(root):
    assert PathResolver(root).resolve("./my\\ file.js", root) == root / "my file.js"


def test_relative_root_dir_rejected():
    with pytest.raises(ConfigurationError):
        PathResolver(Path("docs"))


def test_default_root_is_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert PathResolver().root_dir == Path.cwd()


def test_root_dir_normalized(root):
    resolver = PathResolver(root / "guide" / "..")
    assert resolver.root_dir == root
    assert resolver.resolve("a.js", root) == root / "a.js"
