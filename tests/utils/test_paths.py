"""Tests for lexical path containment."""

from pathlib import PurePosixPath
from pathlib import PureWindowsPath

import pytest
from code_import_cli.utils.paths import is_descendant_of
from code_import_cli.utils.paths import normalize

ROOT = PurePosixPath("/srv/docs")


@pytest.mark.parametrize(
    "path",
    [
        "/srv/docs",
        "/srv/docs/",
        "/srv/docs/a.js",
        "/srv/docs/deep/nested/a.js",
        "/srv/docs/deep/../a.js",
        "/srv/docs/./a.js",
    ],
)
def test_inside_root(path):
    assert is_descendant_of(PurePosixPath(path), ROOT)


@pytest.mark.parametrize(
    "path",
    [
        "/srv",
        "/srv/docs-old/a.js",
        "/srv/docsa.js",
        "/srv/docs/../a.js",
        "/srv/docs/deep/../../a.js",
        "/etc/passwd",
    ],
)
def test_outside_root(path):
    assert not is_descendant_of(PurePosixPath(path), ROOT)


def test_windows_drive_is_separate():
    root = PureWindowsPath("C:/docs")
    assert is_descendant_of(PureWindowsPath("C:/docs/a.js"), root)
    assert not is_descendant_of(PureWindowsPath("D:/docs/a.js"), root)


def test_normalize_is_lexical():
    assert normalize(PurePosixPath("/a/b/../c/./d")) == PurePosixPath("/a/c/d")
