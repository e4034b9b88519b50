import os
import pathlib
import sys
import tempfile
from datetime import date

import pytest


REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
sys.path.append(str(REPO_ROOT))


def pytest_configure():
    if os.getenv("GEMLEDGER_DATABASE_URL") or os.getenv("DATABASE_URL"):
        return
    temp_dir = tempfile.mkdtemp(prefix="gemledger-tests-")
    db_path = pathlib.Path(temp_dir) / "pytest.db"
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"


@pytest.fixture(scope="session")
def sqlite_engine():
    from gemledger.app.db import Base, engine
    import gemledger.app.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def sqlite_session(sqlite_engine):
    from gemledger.app.db import Base, SessionLocal

    Base.metadata.drop_all(bind=sqlite_engine)
    Base.metadata.create_all(bind=sqlite_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def api_client(sqlite_engine, sqlite_session):
    from gemledger.app.db import get_db
    from gemledger.app.main import app
    from fastapi.testclient import TestClient

    def _get_test_db():
        yield sqlite_session

    app.dependency_overrides[get_db] = _get_test_db
    client = TestClient(app)
    try:
        yield client
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def make_invoice():
    from gemledger.app.books.normalize import normalize_invoice

    def _make(number: str, on: date, party: str, kind: str, amount: float, **extra):
        return normalize_invoice(
            {
                "id": number,
                "invoice_number": number,
                "date": on,
                "party": party,
                "transaction_type": kind,
                "rows": [{"cts": 1, "price": amount}],
                **extra,
            }
        )

    return _make
