import os
import signal
import sys
from pathlib import Path

import pytest
from peewee import SqliteDatabase

# Force tests to use in-memory SQLite by default to avoid touching any real DB.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("GOOGLE_CALENDAR_ENABLED", "0")

# ensure project root is on sys.path when running tests
sys.path.append(str(Path(__file__).resolve().parent))

from database.db import db
from database.init import ALL_MODELS
from services import user_service

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TIMEOUT", "60"))

# Один handle на всю сессию: соединение :memory: разделяется между
# потоками TestClient и не закрывается между запросами.
_test_db = SqliteDatabase(
    ":memory:",
    pragmas={"foreign_keys": 1},
    thread_safe=False,
    check_same_thread=False,
)
db.initialize(_test_db)


@pytest.fixture(autouse=True)
def watchdog():
    """Fail a test if it hangs longer than the timeout."""
    if not hasattr(signal, "SIGALRM"):
        yield
        return

    def handler(signum, frame):  # pragma: no cover - timeout handler
        pytest.fail("Test timeout exceeded", pytrace=False)

    signal.signal(signal.SIGALRM, handler)
    signal.alarm(_TEST_TIMEOUT)
    try:
        yield
    finally:
        signal.alarm(0)


@pytest.fixture(autouse=True)
def in_memory_db():
    if not (isinstance(db.obj, SqliteDatabase) and db.obj.database == ":memory:"):
        raise RuntimeError("Refusing to run tests on a non in-memory database")
    db.obj.create_tables(ALL_MODELS)
    try:
        yield db.obj
    finally:
        db.obj.drop_tables(ALL_MODELS)


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(user_service, "_BCRYPT_ROUNDS", 4)
