import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

SEEDS_DIR = _PROJECT_ROOT / "seeds"


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "mechanic_shop_test.db"
    # Point the package to this temp DB
    os.environ["SHOP_DB_PATH"] = str(path)
    from mechanic_shop.db import ensure_schema
    from mechanic_shop.logs import ensure_log_schema
    ensure_schema(str(path))
    ensure_log_schema()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from mechanic_shop.api import app
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def seeded(tmp_db_path):
    """The sample data set shipped in seeds/."""
    from mechanic_shop.logs import LogContext
    from mechanic_shop.services.seed_svc import seed_from_dir
    return seed_from_dir(str(SEEDS_DIR), LogContext("SEED_TEST"))


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("SHOP_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    # children before parents because of foreign keys
    tables = [
        "Closed_Request",
        "Service_Request",
        "Owns",
        "Car",
        "Mechanic",
        "Customer",
        "config",
        "operation_log",
    ]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    from mechanic_shop.services.config_svc import ensure_default_config
    ensure_default_config()
    yield
