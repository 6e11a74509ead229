import sys
from pathlib import Path

import pytest


# Ensure `backend/` is on sys.path so tests can import local modules
# like `stores.*`, `geo.*`, and `main`.
BACKEND_ROOT = Path(__file__).resolve().parents[1]
REPO_ROOT = BACKEND_ROOT.parent
sys.path.insert(0, str(BACKEND_ROOT))

from db.database import connect  # noqa: E402
from stores import build_stores  # noqa: E402


@pytest.fixture
def db():
    database = connect(":memory:")
    yield database
    database.close()


@pytest.fixture
def stores(db):
    return build_stores(db)


@pytest.fixture
def seed_file() -> Path:
    return REPO_ROOT / "data" / "seeds" / "nordic_wildlife.yaml"
