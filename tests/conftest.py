"""
Shared fixtures for wixfrag tests.
Creates isolated temporary directory trees with controlled payload files.
"""
import itertools
import uuid
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so the 'wixfrag' package is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from wixfrag.core.identifiers import IdentifierFactory


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def payload_tree(temp_dir) -> Dict[str, Path]:
    """
    Creates a release payload layout:
    - a/x.txt and a/sub/x.txt are byte-identical (same name, same content)
    - b/y.txt is unique
    - empty/ holds no files at all
    - readme.txt sits directly in the root (belongs to no group)
    """
    root = temp_dir / "payload"
    files = {"root": root}

    (root / "a" / "sub").mkdir(parents=True)
    (root / "b").mkdir()
    (root / "empty").mkdir()

    files["a_x"] = root / "a" / "x.txt"
    files["a_x"].write_bytes(b"shared payload " * 100)
    files["a_sub_x"] = root / "a" / "sub" / "x.txt"
    files["a_sub_x"].write_bytes(b"shared payload " * 100)

    files["b_y"] = root / "b" / "y.txt"
    files["b_y"].write_bytes(b"only in b")

    files["readme"] = root / "readme.txt"
    files["readme"].write_bytes(b"not part of any group")

    return files


@pytest.fixture
def output_dir(temp_dir) -> Path:
    out = temp_dir / "out"
    out.mkdir()
    return out


@pytest.fixture
def sequential_ids() -> IdentifierFactory:
    """Identifier factory issuing UUID(int=1), UUID(int=2), ... for predictable output."""
    counter = itertools.count(1)
    return IdentifierFactory(lambda: uuid.UUID(int=next(counter)))
