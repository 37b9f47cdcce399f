import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


@pytest.fixture()
def sample_text():
    """A short English sentence with a skewed symbol distribution."""
    return "this is an example for huffman encoding"


@pytest.fixture()
def unicode_text():
    """Text mixing emoji, Cyrillic and CJK characters."""
    return "😊 Привет 世界"


@pytest.fixture()
def text_file(tmp_path: Path, sample_text):
    """Write ``sample_text`` to a UTF-8 file and return its path."""
    path = tmp_path / "input.txt"
    path.write_text(sample_text, encoding="utf-8")
    return path


def is_prefix_free(codes):
    """Return ``True`` if no code in ``codes`` is a prefix of another."""
    values = sorted(codes.values())
    return all(
        not b.startswith(a) for a, b in zip(values, values[1:])
    )


@pytest.fixture()
def is_prefix_free_fn():
    """
    Fixture that provides the is_prefix_free helper without importing conftest.
    """
    return is_prefix_free
