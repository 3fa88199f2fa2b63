import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'whisker'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from whisker.core.config import clear_all_caches
from whisker.core.schemas.validation import load_schema


@pytest.fixture(autouse=True)
def _isolate_whisker_env(monkeypatch: pytest.MonkeyPatch):
    """Drop WHISKER_* overrides and cached config around every test."""
    for key in list(os.environ):
        if key.startswith("WHISKER_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    load_schema.cache_clear()
    yield
    clear_all_caches()
