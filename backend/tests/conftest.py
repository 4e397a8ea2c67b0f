import sys
from pathlib import Path

import pytest


# Ensure `backend/` is on sys.path so tests can import `wkt` and `main`
# without installing the project.
BACKEND_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def _fresh_default_options(monkeypatch):
    # Defaults are cached from WKT_* env vars; keep tests independent of the caller's env.
    for name in (
        "WKT_ALLOW_TRAILING",
        "WKT_ALLOW_EXPONENT",
        "WKT_ALLOW_PLUS_SIGN",
        "WKT_INFER_DIMENSIONS",
        "WKT_MAX_DEPTH",
    ):
        monkeypatch.delenv(name, raising=False)
    from wkt.config import clear_options_cache

    clear_options_cache()
    yield
    clear_options_cache()
