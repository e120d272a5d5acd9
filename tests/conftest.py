"""Test configuration and fixtures for treecopy."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def source_tree(tmp_path):
    """Create a source tree with files of known sizes.

    Layout::

        src/
        ├── a.txt            (500 B)
        ├── sub/
        │   ├── b.txt        (50 B)
        │   └── skip/
        │       └── c.txt    (10 B)
        └── node_modules/
            └── pkg.js       (20 B)
    """
    src = tmp_path / "src"
    (src / "sub" / "skip").mkdir(parents=True)
    (src / "node_modules").mkdir()
    (src / "a.txt").write_bytes(b"a" * 500)
    (src / "sub" / "b.txt").write_bytes(b"b" * 50)
    (src / "sub" / "skip" / "c.txt").write_bytes(b"c" * 10)
    (src / "node_modules" / "pkg.js").write_bytes(b"j" * 20)
    return src
