import sys
import textwrap
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from gedcom_codec.loader import Record, reconstruct_values, tokenize_line  # noqa: E402
from gedcom_codec.utils import tests_data_path  # noqa: E402


@pytest.fixture
def make_record():
    """
    Build a Record from an indented GEDCOM snippet, the way the parser
    would (continuations folded in).
    """

    def _make(text: str) -> Record:
        raw_lines = textwrap.dedent(text).strip("\n").splitlines()
        lines = [tokenize_line(raw, lineno=n) for n, raw in enumerate(raw_lines, start=1)]
        lines, _ = reconstruct_values(lines)
        return Record.from_lines(lines)

    return _make


@pytest.fixture
def sample_551_path() -> Path:
    return tests_data_path("sample_551.ged")


@pytest.fixture
def sample_70_path() -> Path:
    return tests_data_path("sample_70.ged")


@pytest.fixture
def broken_refs_path() -> Path:
    return tests_data_path("broken_references.ged")


@pytest.fixture
def malformed_path() -> Path:
    return tests_data_path("malformed.ged")
