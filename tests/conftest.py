import sys
from pathlib import Path

import pytest


# Ensure project root is on sys.path for imports like `import vim_plugin_metadata`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def sample_plugin() -> Path:
    return ROOT / "sample-plugin"


@pytest.fixture
def make_plugin(tmp_path):
    """Create files (relative path -> contents) under a fresh plugin root."""

    def _make(files):
        for relative, contents in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")
        return tmp_path

    return _make
