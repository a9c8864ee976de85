import logging
import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture
def soul_path(tmp_path: Path) -> Path:
    return tmp_path / "home" / "soul.dat"


@pytest.fixture
def sewer(tmp_path: Path) -> Path:
    d = tmp_path / "sewer"
    d.mkdir()
    return d


@pytest.fixture
def restore_root_logging():
    """CLI entry points reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
