"""Pytest configuration and fixtures for gnu_tools tests."""

import tempfile
from pathlib import Path

import pytest

PO_HEADER = '''msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"
"Language: {language}\\n"

'''


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_po(temp_dir):
    """Return a factory that writes a PO file with a standard header."""

    def _write(name: str, body: str, language: str = "fr") -> str:
        path = temp_dir / name
        path.write_text(PO_HEADER.format(language=language) + body, encoding="utf-8")
        return str(path)

    return _write
