import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import qbank_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from qbank_toolkit.compiler.config import CompilerConfig  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


# Common test fixtures
@pytest.fixture
def config() -> CompilerConfig:
    """Return the default build configuration."""
    return CompilerConfig()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample .tex sources."""
    return FIXTURES_DIR


@pytest.fixture
def write_tex(tmp_path: Path):
    """Write a .tex file under tmp_path and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write
